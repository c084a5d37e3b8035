"""Timestamped buffers and numerical helpers for isolated Kalman filtering."""

__version__ = "0.1.0"

__all__ = [
    "timestamp",
    "mathutils",
    "rate",
    "cyclic_thread",
    "noise",
    "progress_bar",
    "history_buffer",
    "multi_history_buffer",
    "time_horizon_buffer",
    "fileio",
    "csv_tool",
    "matrix_utils",
]