"""Tests for the Resource Recorder."""

from __future__ import annotations

import io
import time

import pytest

from featurebench.models.measurement import MeasurementResult
from featurebench.service.recorder.memory_probe import PsutilMemoryProbe, get_default_memory_probe
from featurebench.service.recorder.recorder import Recorder, format_report

MiB = 1024 * 1024


class TestRecorderWithScriptedProbe:
    """Deterministic behaviour using a scripted probe and a manual clock."""

    def test_deltas_relative_to_baseline(self, scripted_probe, clock):
        probe = scripted_probe((1_000, 10_000), (5_000, 12_000))
        recorder = Recorder(probe=probe, clock=clock, collect_garbage=False, echo=False)

        recorder.start()
        clock.advance(0.25)
        result = recorder.stop()

        assert result.rss_delta_bytes == 4_000
        assert result.vms_delta_bytes == 2_000
        assert result.elapsed_seconds == pytest.approx(0.25)
        assert result.elapsed_ms == pytest.approx(250.0)

    def test_negative_delta_when_memory_released(self, scripted_probe, clock):
        probe = scripted_probe((8_000, 8_000), (3_000, 8_000))
        recorder = Recorder(probe=probe, clock=clock, collect_garbage=False, echo=False)

        recorder.start()
        result = recorder.stop()

        assert result.rss_delta_bytes == -5_000
        assert result.vms_delta_bytes == 0

    def test_second_start_discards_first_baseline(self, scripted_probe, clock):
        probe = scripted_probe((1_000, 1_000), (4_000, 4_000), (4_500, 4_100))
        recorder = Recorder(probe=probe, clock=clock, collect_garbage=False, echo=False)

        recorder.start()
        clock.advance(5.0)
        recorder.start()
        clock.advance(0.5)
        result = recorder.stop()

        assert result.rss_delta_bytes == 500
        assert result.vms_delta_bytes == 100
        assert result.elapsed_seconds == pytest.approx(0.5)

    def test_stop_without_start_raises(self, scripted_probe, clock):
        recorder = Recorder(probe=scripted_probe((0, 0)), clock=clock, collect_garbage=False, echo=False)
        with pytest.raises(RuntimeError):
            recorder.stop()

    def test_second_stop_raises(self, scripted_probe, clock):
        recorder = Recorder(probe=scripted_probe((0, 0)), clock=clock, collect_garbage=False, echo=False)
        recorder.start()
        recorder.stop()
        with pytest.raises(RuntimeError):
            recorder.stop()

    def test_running_flag_and_last_result(self, scripted_probe, clock):
        recorder = Recorder(probe=scripted_probe((0, 0)), clock=clock, collect_garbage=False, echo=False)
        assert not recorder.running
        recorder.start()
        assert recorder.running
        result = recorder.stop()
        assert not recorder.running
        assert recorder.last_result is result

    def test_context_manager(self, scripted_probe, clock):
        probe = scripted_probe((100, 100), (300, 400))
        with Recorder(probe=probe, clock=clock, collect_garbage=False, echo=False, label="block") as recorder:
            clock.advance(1.0)

        assert recorder.last_result.rss_delta_bytes == 200
        assert recorder.last_result.vms_delta_bytes == 300
        assert recorder.last_result.label == "block"
        assert recorder.last_result.elapsed_seconds == pytest.approx(1.0)

    def test_start_collects_garbage(self, scripted_probe, clock, monkeypatch):
        calls = []
        monkeypatch.setattr("featurebench.service.recorder.recorder.gc.collect", lambda: calls.append(1))

        Recorder(probe=scripted_probe((0, 0)), clock=clock, echo=False).start()
        Recorder(probe=scripted_probe((0, 0)), clock=clock, echo=False, collect_garbage=False).start()

        assert calls == [1]


class TestRecorderOutput:
    """Printed report lines."""

    def test_stop_prints_report(self, scripted_probe, clock):
        out = io.StringIO()
        probe = scripted_probe((0, 0), (1_234_567, 2_048))
        recorder = Recorder(probe=probe, clock=clock, collect_garbage=False, out=out)

        recorder.start()
        clock.advance(0.2001234)
        recorder.stop()

        lines = out.getvalue().splitlines()
        assert lines == [
            "Physical memory: 1,234,567 bytes",
            "Virtual memory: 2,048 bytes",
            "Elapsed: 00:00:00.2001234",
            "Elapsed ms: 200.123",
        ]

    def test_stop_prints_to_stdout_by_default(self, scripted_probe, clock, capsys):
        recorder = Recorder(probe=scripted_probe((0, 0)), clock=clock, collect_garbage=False)
        recorder.start()
        recorder.stop()
        captured = capsys.readouterr()
        assert "Physical memory: 0 bytes" in captured.out
        assert "Elapsed: 00:00:00.0000000" in captured.out

    def test_echo_disabled_prints_nothing(self, scripted_probe, clock, capsys):
        recorder = Recorder(probe=scripted_probe((0, 0)), clock=clock, collect_garbage=False, echo=False)
        recorder.start()
        recorder.stop()
        assert "Physical memory" not in capsys.readouterr().out

    def test_format_report_with_label(self):
        result = MeasurementResult(rss_delta_bytes=-1024, vms_delta_bytes=0, elapsed_seconds=3725.5, label="join")
        assert format_report(result) == [
            "--- join ---",
            "Physical memory: -1,024 bytes",
            "Virtual memory: 0 bytes",
            "Elapsed: 01:02:05.5000000",
            "Elapsed ms: 3,725,500.000",
        ]

    def test_result_to_dict(self):
        result = MeasurementResult(rss_delta_bytes=10, vms_delta_bytes=20, elapsed_seconds=0.5)
        assert result.to_dict() == {
            "label": None,
            "rss_delta_bytes": 10,
            "vms_delta_bytes": 20,
            "elapsed_seconds": 0.5,
            "elapsed_ms": 500.0,
        }


class TestRecorderWithPsutil:
    """Measurements of the real process."""

    def test_default_probe_reads_current_process(self):
        snapshot = get_default_memory_probe().snapshot()
        assert snapshot.rss_bytes > 0
        assert snapshot.vms_bytes >= snapshot.rss_bytes

    def test_immediate_stop_is_near_zero(self):
        recorder = Recorder(echo=False)
        recorder.start()
        result = recorder.stop()
        assert 0 <= result.elapsed_ms < 100
        assert abs(result.rss_delta_bytes) < 8 * MiB

    def test_retained_allocation_increases_rss(self):
        size = 64 * MiB
        recorder = Recorder(echo=False)
        recorder.start()
        retained = b"\x01" * size
        result = recorder.stop()

        assert len(retained) == size
        assert result.rss_delta_bytes > 0
        assert result.rss_delta_bytes >= size * 0.9

    def test_elapsed_exceeds_sleep(self):
        recorder = Recorder(echo=False)
        recorder.start()
        time.sleep(0.2)
        result = recorder.stop()
        assert result.elapsed_ms > 200

    def test_probe_for_explicit_pid(self):
        import os

        probe = PsutilMemoryProbe(pid=os.getpid())
        assert probe.snapshot().rss_bytes > 0
