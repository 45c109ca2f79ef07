"""
Resource Recorder

Measures elapsed wall-clock time and the change in process memory usage
between two points of a program, for ad-hoc performance comparison.

Typical use:

    recorder = Recorder()
    recorder.start()
    build_strings()
    recorder.stop()

or as a context manager:

    with Recorder(label="join") as recorder:
        build_strings()
    print(recorder.last_result.elapsed_ms)

``start`` forces a garbage collection pass before taking the baseline, which
lowers the noise from deferred deallocation. Each instance owns its own
baseline; use one recorder per thread.
"""
import gc
import sys
import threading
import time
from typing import Callable, Optional, TextIO

from featurebench.models.measurement import MeasurementBaseline, MeasurementResult
from featurebench.service.recorder.memory_probe import MemoryProbe, get_default_memory_probe
from featurebench.util.format_utils import format_bytes, format_milliseconds, format_timespan
from featurebench.util.log_config import setup_logger

logger = setup_logger(__name__)


class Recorder:
    """Baseline/delta recorder for time and process memory"""

    def __init__(
        self,
        probe: Optional[MemoryProbe] = None,
        clock: Callable[[], float] = time.perf_counter,
        collect_garbage: bool = True,
        echo: bool = True,
        out: Optional[TextIO] = None,
        label: Optional[str] = None,
    ):
        """
        Initialize the recorder.

        Args:
            probe: Memory probe (default: psutil probe for the current process)
            clock: Monotonic clock returning seconds
            collect_garbage: Run gc.collect() before each baseline
            echo: Print the report lines on stop()
            out: Stream to print to (default: sys.stdout at print time)
            label: Optional name attached to every result
        """
        self.probe = probe or get_default_memory_probe()
        self.clock = clock
        self.collect_garbage = collect_garbage
        self.echo = echo
        self.out = out
        self.label = label
        self.baseline: Optional[MeasurementBaseline] = None
        self.last_result: Optional[MeasurementResult] = None
        self._lock = threading.Lock()

    def start(self) -> MeasurementBaseline:
        """
        Collect garbage, then record memory usage and restart the timer.

        A previous baseline, if any, is discarded.
        """
        if self.collect_garbage:
            gc.collect()

        with self._lock:
            snapshot = self.probe.snapshot()
            # Timer last so the probe read is not part of the measured region
            self.baseline = MeasurementBaseline(
                started_at=self.clock(),
                rss_bytes=snapshot.rss_bytes,
                vms_bytes=snapshot.vms_bytes
            )
            return self.baseline

    def stop(self) -> MeasurementResult:
        """
        Stop the timer, compute deltas since the last start() and print them.

        Raises:
            RuntimeError: If start() has not been called since the last stop()
        """
        with self._lock:
            stopped_at = self.clock()
            baseline = self.baseline
            if baseline is None:
                raise RuntimeError("Recorder.stop() called without a preceding start()")

            snapshot = self.probe.snapshot()
            result = MeasurementResult(
                rss_delta_bytes=snapshot.rss_bytes - baseline.rss_bytes,
                vms_delta_bytes=snapshot.vms_bytes - baseline.vms_bytes,
                elapsed_seconds=max(0.0, stopped_at - baseline.started_at),
                label=self.label
            )
            self.baseline = None
            self.last_result = result

        logger.debug(f"Recorder stopped: {result.to_dict()}")
        if self.echo:
            self.print_result(result)
        return result

    @property
    def running(self) -> bool:
        return self.baseline is not None

    def print_result(self, result: MeasurementResult) -> None:
        out = self.out or sys.stdout
        for line in format_report(result):
            print(line, file=out)

    def __enter__(self) -> "Recorder":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


def format_report(result: MeasurementResult) -> list[str]:
    """Render a result as the lines printed by Recorder.stop()"""
    lines = []
    if result.label:
        lines.append(f"--- {result.label} ---")
    lines.extend([
        f"Physical memory: {format_bytes(result.rss_delta_bytes)} bytes",
        f"Virtual memory: {format_bytes(result.vms_delta_bytes)} bytes",
        f"Elapsed: {format_timespan(result.elapsed_seconds)}",
        f"Elapsed ms: {format_milliseconds(result.elapsed_seconds)}",
    ])
    return lines
