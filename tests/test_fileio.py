import pytest

from isokf import fileio


def test_lines_round_trip(tmp_path):
    path = tmp_path / "lines.txt"
    path.write_text("first\nsecond line\n\nlast\n")
    assert fileio.get_lines_from_file(str(path)) == ["first", "second line", "", "last"]


def test_lines_of_missing_file_are_empty(tmp_path):
    assert fileio.get_lines_from_file(str(tmp_path / "missing.txt")) == []


def test_abs_paths_from_file(tmp_path):
    listing = tmp_path / "list.txt"
    listing.write_text("a.txt\n/abs/b.txt\n")
    result = fileio.get_abs_paths_from_file(str(listing))
    assert result == [f"{tmp_path}/a.txt", "/abs/b.txt"]
    assert fileio.get_abs_paths_from_file("") == []


def test_check_path_string_collapses_slashes():
    result = fileio.check_path_string("a//b///c")
    assert "//" not in result
    assert result.split("/") == ["a", "b", "c"]


def test_get_tokens_with_delimiter():
    assert fileio.get_tokens("a//b/", "/") == ["a", "b"]
    assert fileio.get_tokens("", "/") == []


def test_get_tokens_whitespace():
    assert fileio.get_tokens("  x y\tz ") == ["x", "y", "z"]


def test_get_tokens_empty_delimiter():
    with pytest.raises(ValueError):
        fileio.get_tokens("abc", "")


def test_get_first_token():
    assert fileio.get_first_token("a,b,c", ",") == "a"
    assert fileio.get_first_token("abc", ",") == "abc"
    assert fileio.get_first_token(",b", ",") == ""


def test_is_absolute_path():
    assert fileio.is_absolute_path("/usr")
    assert not fileio.is_absolute_path("usr")
    assert not fileio.is_absolute_path("")


def test_path_parts():
    assert fileio.get_file_extension("dir/f.tar.gz") == "gz"
    assert fileio.get_file_extension("noext") == ""
    assert fileio.get_file_dir("/a/b/c.txt") == "/a/b"
    assert fileio.get_file_dir("c.txt") == ""
    assert fileio.get_file_name("/a/b/c.txt") == "c"
    assert fileio.get_file_name("c.txt") == "c"
    assert fileio.get_file_name("/a/b/c") == ""
    assert fileio.get_file_parent_dir_name("/a/b/c.txt") == "b"
    assert fileio.get_last_dir_name("/a/b") == "b"
    assert fileio.get_last_dir_name("b") == ""


def test_create_directory_recursive(tmp_path):
    target = f"{tmp_path}/x/y/z"
    assert not fileio.dir_exists(target)
    fileio.create_directory_recursive(target)
    assert fileio.dir_exists(target)
    assert fileio.file_exists(target)


def test_create_directory_recursive_rejects_empty():
    with pytest.raises(ValueError):
        fileio.create_directory_recursive("///")


def test_create_directory_existing_raises(tmp_path):
    with pytest.raises(FileExistsError):
        fileio.create_directory(str(tmp_path))


def test_create_directory_full_is_idempotent(tmp_path):
    target = f"{tmp_path}/p/q"
    assert not fileio.dir_exists(target)
    fileio.create_directory_full(target)
    assert fileio.dir_exists(target)
    fileio.create_directory_full(target)
    assert fileio.dir_exists(target)
    assert fileio.get_dirs_in_directory(f"{tmp_path}/p") == [target]


def test_remove_directory(tmp_path):
    target = tmp_path / "gone"
    (target / "inner").mkdir(parents=True)
    (target / "inner" / "f.txt").write_text("x")
    fileio.remove_directory(str(target))
    assert not target.exists()
    with pytest.raises(OSError):
        fileio.remove_directory(str(target))


def test_files_in_directory(tmp_path):
    (tmp_path / "a.csv").write_text("")
    (tmp_path / "b.txt").write_text("")
    (tmp_path / ".hidden.csv").write_text("")
    (tmp_path / "sub.csv").mkdir()
    assert fileio.get_files_in_directory(str(tmp_path), "csv") == [f"{tmp_path}/a.csv"]
    assert fileio.get_files_in_directory(str(tmp_path)) == [f"{tmp_path}/a.csv", f"{tmp_path}/b.txt"]
    assert fileio.get_files_in_directory(str(tmp_path / "nope")) == []


def test_dirs_in_directory(tmp_path):
    (tmp_path / "d1").mkdir()
    (tmp_path / ".d2").mkdir()
    (tmp_path / "f.txt").write_text("")
    assert fileio.get_dirs_in_directory(str(tmp_path)) == [f"{tmp_path}/d1"]
    assert fileio.get_dirs_in_directory(str(tmp_path / "nope")) == []


def test_open_file_creates_parent(tmp_path):
    target = f"{tmp_path}/new/dir/out.txt"
    with fileio.open_file(target) as handle:
        handle.write("hello")
    assert fileio.get_lines_from_file(target) == ["hello"]


def test_open_file_without_directory_part(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        fileio.open_file("fresh.txt")