import threading
import time

import pytest

from isokf.cyclic_thread import CyclicThread


class _Recorder:
    def __init__(self, work_s=0.0):
        self.calls = 0
        self.shutdown_calls = 0
        self.work_s = work_s
        self.hit = threading.Event()

    def step(self):
        self.calls += 1
        if self.work_s:
            time.sleep(self.work_s)
        self.hit.set()

    def shutdown(self):
        self.shutdown_calls += 1


def _attach(thread, work_s=0.0):
    recorder = _Recorder(work_s)
    thread.run_step = recorder.step
    thread.on_shutdown = recorder.shutdown
    return recorder


def _wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_starts_paused_and_runs_after_resume():
    t = CyclicThread(200)
    rec = _attach(t)
    try:
        time.sleep(0.05)
        assert rec.calls == 0
        t.resume()
        assert rec.hit.wait(2.0)
        assert rec.calls >= 1
    finally:
        t.terminate()
        t.join()


def test_stop_pauses_stepping():
    t = CyclicThread(200)
    rec = _attach(t)
    try:
        t.resume()
        assert _wait_for(lambda: rec.calls >= 2)
        t.stop()
        time.sleep(0.05)
        snapshot = rec.calls
        time.sleep(0.05)
        assert rec.calls == snapshot
    finally:
        t.terminate()
        t.join()


def test_terminate_calls_hook_and_ends_loop():
    t = CyclicThread(200)
    rec = _attach(t)
    t.resume()
    assert rec.hit.wait(2.0)
    t.terminate()
    t.join()
    assert rec.shutdown_calls == 1
    snapshot = rec.calls
    time.sleep(0.03)
    assert rec.calls == snapshot


def test_context_manager_terminates():
    with CyclicThread(200) as t:
        rec = _attach(t)
        t.resume()
        assert rec.hit.wait(2.0)
    assert rec.shutdown_calls == 1
    snapshot = rec.calls
    time.sleep(0.03)
    assert rec.calls == snapshot


def test_process_time_reflects_step_duration():
    t = CyclicThread(20)
    rec = _attach(t, work_s=0.02)
    try:
        assert t.process_time_ms() == 0.0
        t.resume()
        assert _wait_for(lambda: rec.calls >= 2)
        t.stop()
        time.sleep(0.1)
        ms = t.process_time_ms()
        assert ms >= 15
        assert t.process_time_s() == pytest.approx(ms * 0.001)
    finally:
        t.terminate()
        t.join()


def test_set_rate_rejects_negative():
    t = CyclicThread(100)
    _attach(t)
    try:
        with pytest.raises(ValueError):
            t.set_rate_hz(-1)
    finally:
        t.terminate()
        t.join()