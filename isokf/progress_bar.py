"""A text progress bar that redraws at fixed percentage steps."""

from __future__ import annotations

import math
import sys
import time
from typing import TextIO


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // b
    return q if a >= 0 else -q


def sec_to_hhmmss(s: float) -> str:
    """Format seconds as unpadded ``h:m:s``."""
    sec = math.floor(s)
    hour = _trunc_div(sec, 3600)
    rest = sec - 3600 * hour
    minute = _trunc_div(rest, 60)
    sec = sec - 60 * _trunc_div(sec, 60)
    return f"{hour}:{minute}:{sec}"


class ProgressBar:
    """Prints progress lines every ``upd_step_perc`` percent of ``num_steps``."""

    def __init__(
        self,
        num_steps: int,
        bar_char_len: int = 50,
        upd_step_perc: int = 10,
        start_msg: str = "",
        end_msg: str = "done",
        show_rem_time: bool = True,
        show_bar: bool = True,
        show_percentage: bool = True,
        show_actual_num: bool = True,
        show_final_time: bool = True,
        bar_char_symbol: str = "=",
        empty_bar_char_symbol: str = " ",
        create_new_line: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        if num_steps < 0:
            raise ValueError("number of steps must not be negative")
        upd_step = min(100, max(upd_step_perc, 0))
        if upd_step == 0:
            raise ValueError("update step must be positive")
        self.num_steps = num_steps
        self.bar_char_len = bar_char_len
        self.upd_step = upd_step
        self.start_msg = start_msg
        self.end_msg = end_msg
        self.show_rem_time = show_rem_time
        self.show_bar = show_bar
        self.show_percentage = show_percentage
        self.show_actual_num = show_actual_num
        self.show_final_time = show_final_time
        self.bar_char_symbol = bar_char_symbol
        self.empty_bar_char_symbol = empty_bar_char_symbol
        self.create_new_line = create_new_line
        self._stream = stream if stream is not None else sys.stdout
        self._increment = (num_steps * 100 // upd_step) // 100
        self._next_render = self._increment
        self._tick = 0
        self._final_time_sec = 0.0
        self._start = time.monotonic()

    def _elapsed(self) -> float:
        return time.monotonic() - self._start

    def progress(self) -> None:
        """Advance by one step and redraw if a render point is reached."""
        self._tick = min(self._tick + 1, self.num_steps)
        self.update(self._tick)

    def update(self, i: int) -> None:
        """Draw the state at step ``i`` if it has reached the next render point."""
        if i < self._next_render:
            return
        out = self._stream
        if i > 0 and self.create_new_line:
            out.write("\n")
        self._next_render = min(self._next_render + self._increment, self.num_steps)

        if i >= self.num_steps:
            parts = ["[", self.end_msg]
            if self.show_final_time:
                if self._final_time_sec == 0.0:
                    self._final_time_sec = self._elapsed()
                parts.append(f" after {sec_to_hhmmss(self._final_time_sec)} ")
            parts.append("]\n")
            out.write("".join(parts))
            return

        filled = (i * self.bar_char_len) // self.num_steps
        parts = [
            "[",
            self.bar_char_symbol * filled,
            self.empty_bar_char_symbol * (self.bar_char_len - filled),
            "]",
        ]
        if self.show_actual_num:
            parts.append(f" {i}/{self.num_steps}")
        percent = i * 100.0 / self.num_steps
        if self.show_percentage:
            parts.append(f" {percent:g}%")
        if self.show_rem_time:
            curr_sec = self._elapsed()
            rem_sec = curr_sec * (100 - percent) / percent if percent > 0 else 0.0
            parts.append(f"[{sec_to_hhmmss(curr_sec)}/{sec_to_hhmmss(rem_sec)}]")
        parts.append("\n")
        out.write("".join(parts))