"""Shared fixtures: deterministic probe and clock for Recorder tests."""

from __future__ import annotations

from typing import Iterable, List

import pytest

from featurebench.service.recorder.memory_probe import MemoryProbe
from featurebench.service.recorder.memory_snapshot import MemorySnapshot


class ScriptedProbe(MemoryProbe):
    """Returns the queued (rss, vms) readings in order, repeating the last one."""

    def __init__(self, readings: Iterable[tuple[int, int]]):
        self.readings: List[tuple[int, int]] = list(readings)
        self.calls = 0

    def snapshot(self) -> MemorySnapshot:
        idx = min(self.calls, len(self.readings) - 1)
        self.calls += 1
        rss, vms = self.readings[idx]
        return MemorySnapshot(timestamp=float(self.calls), rss_bytes=rss, vms_bytes=vms)


class ManualClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def scripted_probe():
    def _make(*readings: tuple[int, int]) -> ScriptedProbe:
        return ScriptedProbe(readings)
    return _make


@pytest.fixture
def config_dir(tmp_path):
    """A config directory with a base config and a 'dev' override."""
    (tmp_path / "config.yaml").write_text(
        "chapters: [operators, strings, comparison]\n"
        "log_level: info\n"
        "recorder:\n"
        "  collect_garbage: false\n"
        "pool:\n"
        "  max_workers: 3\n"
        "  task_durations: [0.01, 0.02]\n"
        "comparison:\n"
        "  repeat: 2\n"
        "  string_parts: 100\n"
        "  workloads: [join, string_io]\n",
        encoding="utf-8",
    )
    (tmp_path / "config_dev.yaml").write_text(
        "chapters: [conversion]\n"
        "pool:\n"
        "  max_workers: 1\n",
        encoding="utf-8",
    )
    return tmp_path
