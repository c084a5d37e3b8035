"""Path string helpers and small file-system utilities."""

from __future__ import annotations

import logging
import os
import shutil
from typing import TextIO

_log = logging.getLogger(__name__)

# Permissions given to directories that are created here.
DIRECTORY_MODE = 0o733


def get_lines_from_file(file_name: str) -> list[str]:
    """All lines of a text file, without line endings; empty if it cannot be read."""
    try:
        with open(file_name, encoding="utf-8") as handle:
            text = handle.read()
    except OSError:
        _log.warning("unable to open file: %s", file_name)
        return []
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def get_abs_paths_from_file(list_file: str) -> list[str]:
    """Lines of a list file, with relative entries resolved against the file's directory."""
    if not list_file:
        return []
    base_dir = get_file_dir(list_file)
    return [
        line if is_absolute_path(line) else f"{base_dir}/{line}"
        for line in get_lines_from_file(list_file)
    ]


def check_path_string(path: str) -> str:
    """Collapse every run of slashes into a single slash."""
    while "//" in path:
        path = path.replace("//", "/")
    return path


def get_tokens(text: str, delim: str | None = None) -> list[str]:
    """Non-empty pieces of ``text`` split at ``delim``, or at whitespace when it is None."""
    if delim is None:
        return text.split()
    if not delim:
        raise ValueError("delimiter must not be empty")
    return [token for token in text.split(delim) if token]


def get_first_token(text: str, delim: str) -> str:
    """Text before the first ``delim``, or the whole text if it has none."""
    if not delim:
        raise ValueError("delimiter must not be empty")
    pos = text.find(delim)
    return text if pos < 0 else text[:pos]


def file_exists(name: str) -> bool:
    return os.path.exists(name)


def dir_exists(path: str) -> bool:
    return os.path.isdir(path)


def is_absolute_path(path: str) -> bool:
    return path.startswith("/")


def get_file_extension(filename: str) -> str:
    """Text after the last dot, or an empty string."""
    idx = filename.rfind(".")
    return filename[idx + 1:] if idx >= 0 else ""


def get_file_dir(filename: str) -> str:
    """Text before the last slash, or an empty string."""
    idx = filename.rfind("/")
    return filename[:idx] if idx >= 0 else ""


def get_file_name(filename: str) -> str:
    """Name between the last slash and the last dot; empty if there is no dot."""
    slash = filename.rfind("/")
    dot = filename.rfind(".")
    if dot < 0:
        return ""
    if slash < 0:
        return filename[:dot]
    if dot < slash + 1:
        return filename[slash + 1:]
    return filename[slash + 1:dot]


def get_file_parent_dir_name(filename: str) -> str:
    """Name of the directory that holds ``filename``."""
    file_dir = get_file_dir(filename)
    idx = file_dir.rfind("/")
    return file_dir[idx + 1:] if idx >= 0 else ""


def get_last_dir_name(path: str) -> str:
    """Last component of a slash-separated path, or empty if it has no slash."""
    idx = path.rfind("/")
    return path[idx + 1:] if idx >= 0 else ""


def create_directory(dir_name: str) -> None:
    """Create one directory; raises OSError if that fails."""
    os.mkdir(dir_name, DIRECTORY_MODE)


def create_directory_recursive(dir_name: str) -> None:
    """Create a directory and every missing parent; raises OSError on failure."""
    nodes = get_tokens(dir_name, "/")
    if not nodes:
        raise ValueError(f"no directory named in {dir_name!r}")
    path = "/" if is_absolute_path(dir_name) else ""
    for node in nodes:
        path += node
        if not file_exists(path):
            _log.debug("create %s", path)
            create_directory(path)
        path += "/"


def create_directory_full(base_dir: str) -> None:
    """Make sure ``base_dir`` exists as a directory, creating it if needed."""
    if dir_exists(base_dir):
        return
    create_directory_recursive(base_dir)
    if not dir_exists(base_dir):
        _log.error("something went wrong creating dir: %s", base_dir)
        raise OSError(f"could not create directory {base_dir!r}")


def remove_directory(dir_name: str) -> None:
    """Remove a directory tree (or a single file); raises OSError on failure."""
    if os.path.isdir(dir_name) and not os.path.islink(dir_name):
        shutil.rmtree(dir_name)
    else:
        os.remove(dir_name)


def _visible_entries(directory: str) -> list[tuple[str, str]]:
    entries = []
    for name in sorted(os.listdir(directory)):
        if name.startswith("."):
            continue
        full = f"{directory}/{name}"
        if os.path.exists(full):
            entries.append((name, full))
    return entries


def get_files_in_directory(directory: str, extension: str = "") -> list[str]:
    """Paths of the visible files in ``directory``, optionally with a given extension."""
    if not dir_exists(directory):
        return []
    return [
        full
        for name, full in _visible_entries(directory)
        if not os.path.isdir(full) and (not extension or get_file_extension(name) == extension)
    ]


def get_dirs_in_directory(directory: str) -> list[str]:
    """Paths of the visible sub-directories of ``directory``."""
    if not dir_exists(directory):
        return []
    return [full for _, full in _visible_entries(directory) if os.path.isdir(full)]


def open_file(filename: str) -> TextIO:
    """Open ``filename`` for writing, creating its directory first if needed.

    A file that does not exist yet must be named with a directory part.
    """
    if not file_exists(filename):
        base_dir = get_file_dir(filename)
        if not base_dir:
            raise FileNotFoundError(f"{filename!r} does not exist and names no directory")
        create_directory_full(base_dir)
    return open(filename, "w", encoding="utf-8")