# isokf

Building blocks for isolated Kalman filtering: nanosecond timestamps,
time-ordered history buffers, covariance helpers and a handful of
utilities for simulations.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## What is inside

| Module | Contents |
| --- | --- |
| `isokf.timestamp` | `Timestamp` (integer nanoseconds, exposed as `sec` and `nsec`), `StampedData`, `as_timestamp` |
| `isokf.history_buffer` | `HistoryBuffer`, one value per timestamp, kept in time order |
| `isokf.multi_history_buffer` | `MultiHistoryBuffer`, several values per timestamp in insertion order |
| `isokf.time_horizon_buffer` | `TimeHorizonBuffer`, `TimeHorizonMultiBuffer`, which drop entries older than a time horizon |
| `isokf.matrix_utils` | matrix and vector concatenation, covariance splitting and stacking, symmetrising and PSD correction |
| `isokf.mathutils` | angle conversion and wrapping, skew matrices, quaternion to roll/pitch/yaw, truncated matrix exponential |
| `isokf.noise` | `GaussianNoiseGen`, `RandomSampler` |
| `isokf.rate` | `Rate`, which sleeps to keep a loop at a fixed frequency |
| `isokf.cyclic_thread` | `CyclicThread`, a background loop run at a fixed rate |
| `isokf.progress_bar` | `ProgressBar`, `sec_to_hhmmss` |
| `isokf.fileio` | path string, token and directory helpers |
| `isokf.csv_tool` | `read_csv` and `write_csv` for column-oriented numeric files |

## Examples

### Timestamps

A `Timestamp` holds an integer number of nanoseconds, so two stamps that
should be equal compare equal exactly. `as_timestamp` turns an `int` into a
stamp in nanoseconds and a `float` into a stamp in seconds; every buffer
method that takes a time accepts any of the three.

```python
from isokf.timestamp import Timestamp

t = Timestamp.from_sec(1.5)
print(t.stamp_ns())                                  # 1500000000
print(Timestamp.from_ms(1500) == t)                  # True
print((t - Timestamp.from_sec(0.5)).to_sec())        # 1.0
print(t)                                             # 1.500000000
```

`StampedData` pairs a value with a stamp; comparisons look at the stamp
only, and a plain number on the other side is read as seconds.

### History buffers

Lookups return a `StampedData` (with `.data` and `.stamp`), or `None` when
nothing matches.

```python
from isokf.history_buffer import HistoryBuffer

buf = HistoryBuffer()
buf.insert("a", 1.0)
buf.insert("b", 2.0)
buf.insert("c", 3.0)

buf.get_at_t(2.0).data         # "b"
buf.get_before_t(2.0).data     # "a"  (strictly before)
buf.get_after_t(2.0).data      # "c"  (strictly after)
buf.get_closest_t(2.9).data    # "c"  (a tie goes to the later entry)
buf.get_at_t(5.0)              # None

buf.accumulate("", lambda acc, x: acc + x)    # "abc"
buf.remove_before_t(2.0)                      # keeps "b" and "c"
[item.data for item in buf]                   # ["b", "c"]
```

`get_oldest` and `get_latest` raise `LookupError` on an empty buffer, and
`at(idx)` raises `IndexError` for a position out of range.
`remove_every_n` and `subsample_by_n` thin the buffer by position;
`format(n, reverse)` and `str()` give one line per entry.

`MultiHistoryBuffer` has the same interface plus `get_all_at_t`, which
returns every value stored at one stamp, and
`get_timestamps_between_t1_t2`.

A `TimeHorizonBuffer` (or `TimeHorizonMultiBuffer`) can trim itself to a
window given in seconds:

```python
from isokf.time_horizon_buffer import TimeHorizonBuffer

window = TimeHorizonBuffer(1.0)
for k in range(5):
    window.insert(k, float(k))
window.check_horizon()
[item.data for item in window]     # [3, 4]
```

### Covariance helpers

```python
import numpy as np
from isokf import matrix_utils

sigma = np.array([[2.0, 0.5], [0.5, 1.0]])
matrix_utils.is_positive_semidefinite(sigma)        # True

s_ii, s_jj, s_ij = matrix_utils.split_sigma(sigma, 1, 1)
matrix_utils.stack_sigma(s_ii, s_jj, s_ij)          # the original matrix

fixed, is_psd = matrix_utils.correct_covariance(np.array([[1.0, 2.0], [2.0, 1.0]]))
```

`split_sigma` takes two, three or four block sizes. `horcat`, `vertcat`,
`horcat_vec` and `vertcat_vec` take two or more blocks and raise
`ValueError` on a dimension mismatch.

### Angles and rotations

Quaternions are given as `(w, x, y, z)`.

```python
from isokf import mathutils

mathutils.wrap_to_pi(4.0)               # 4.0 - 2*pi
mathutils.quat2rpy((1.0, 0.0, 0.0, 0.0))  # (0.0, 0.0, 0.0)
mathutils.mat_exp(mathutils.skew([0.0, 0.0, 0.1]), 4)
```

Note that `wrap_to_2pi` wraps into the range bounded by plus and minus
2/pi, not 2*pi.

### Timing and background loops

```python
import time
from isokf.cyclic_thread import CyclicThread

class Counter(CyclicThread):
    def __init__(self):
        self.count = 0
        super().__init__(100.0)

    def run_step(self):
        self.count += 1

with Counter() as worker:     # the thread starts paused
    worker.resume()
    time.sleep(0.1)
print(worker.count)
```

Leaving the `with` block calls `terminate()` and `join()`.
`process_time_ms()` gives a running average of the cycle time.

### Noise

```python
from isokf.noise import GaussianNoiseGen

gen = GaussianNoiseGen(0.0, 0.5, seed=42)
gen.randn()        # one float
gen.randn(10)      # a numpy array of ten samples
```

`GaussianNoiseGen.instance()` and `RandomSampler.instance()` return shared
objects created on first use.

### Progress bar

```python
from isokf.progress_bar import ProgressBar

bar = ProgressBar(100, show_rem_time=False)
for _ in range(100):
    bar.progress()
```

Lines go to `stream` (standard output by default); the last one reads like
`[done after 0:0:0 ]`.

### Files and CSV

```python
from isokf.csv_tool import read_csv, write_csv

write_csv({"t": [0.0, 0.1], "x": [1.0, 2.0]}, "out/data.csv")
data = read_csv("out/data.csv")       # {"t": [0.0, 0.1], "x": [1.0, 2.0]}
```

`write_csv` creates missing directories. `read_csv` treats the line before
the first numeric line as the header, skips rows with the wrong number of
fields and raises `FileNotFoundError` for a missing file or `ValueError`
when there is no header. The helpers in `isokf.fileio` raise `OSError`
when a directory cannot be created or removed.

## What this package does not do

It contains no Kalman filter or estimator classes, no measurement types and
no logging setup; it supplies the buffers and numerical helpers such code
is built on. It installs no command-line program.