import time

import pytest

from isokf.rate import Rate


def test_zero_rate_does_not_sleep():
    rate = Rate(0)
    start = time.monotonic()
    rate.sleep()
    elapsed = time.monotonic() - start
    assert rate.process_time_ms() < 50
    assert elapsed < 0.05


def test_sleep_fills_the_period():
    rate = Rate(20)
    start = time.monotonic()
    rate.sleep()
    elapsed = time.monotonic() - start
    assert rate.process_time_ms() < 40
    assert elapsed >= 0.04


def test_process_time_is_measured():
    rate = Rate(10)
    start = time.monotonic()
    time.sleep(0.03)
    rate.sleep()
    elapsed = time.monotonic() - start
    assert 25 <= rate.process_time_ms() < 90
    assert elapsed >= 0.09


def test_set_rate_changes_period():
    rate = Rate(0)
    rate.set_rate(25)
    start = time.monotonic()
    rate.sleep()
    elapsed = time.monotonic() - start
    assert rate.process_time_ms() < 30
    assert elapsed >= 0.03


def test_negative_rate_rejected():
    with pytest.raises(ValueError):
        Rate(-1.0)
    rate = Rate(5)
    with pytest.raises(ValueError):
        rate.set_rate(-5)