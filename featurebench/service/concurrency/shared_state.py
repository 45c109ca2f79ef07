"""
Shared state touched by several worker threads.

SharedCounter guards a counter and a text buffer with a lock acquired with a
timeout; a worker that cannot get the lock in time skips its update and the
miss is counted. AtomicCounter needs no lock from the caller.
"""
import threading
from dataclasses import dataclass
from typing import List

from featurebench.service.task_executor.task_executor import TaskExecutor
from featurebench.util.log_config import setup_logger

logger = setup_logger(__name__)


class SharedCounter:

    def __init__(self):
        self._lock = threading.Lock()
        self._parts: List[str] = []
        self.value = 0
        self.misses = 0
        self._misses_lock = threading.Lock()

    def increment(self, marker: str = "+", timeout: float = 1.0) -> bool:
        """
        Increment the counter and append ``marker`` to the shared text.

        Returns:
            False if the lock was not acquired within ``timeout`` seconds
        """
        if not self._lock.acquire(timeout=timeout):
            with self._misses_lock:
                self.misses += 1
            logger.debug(f"Lock not acquired within {timeout}s, skipping '{marker}'")
            return False
        try:
            self.value += 1
            self._parts.append(marker)
        finally:
            self._lock.release()
        return True

    @property
    def text(self) -> str:
        with self._lock:
            return "".join(self._parts)


class AtomicCounter:
    """Counter whose read-modify-write is a single step for callers"""

    def __init__(self, start: int = 0):
        self._value = start
        self._lock = threading.Lock()

    def increment(self) -> int:
        """Add one and return the new value"""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        return self._value


@dataclass
class SharedStateReport:
    locked_value: int
    locked_misses: int
    atomic_value: int
    text_length: int
    expected: int

    @property
    def consistent(self) -> bool:
        return self.locked_value + self.locked_misses == self.expected and self.atomic_value == self.expected


def run_shared_state_demo(iterations: int = 1000, workers: int = 2, lock_timeout: float = 1.0) -> SharedStateReport:
    """
    Let ``workers`` threads hammer both counters ``iterations`` times each.

    Every increment attempt either lands or is counted as a miss, so
    ``locked_value + locked_misses`` always equals ``workers * iterations``.
    """
    if iterations < 0:
        raise ValueError("iterations must not be negative")

    shared = SharedCounter()
    atomic = AtomicCounter()

    def _work(marker: str) -> int:
        for _ in range(iterations):
            shared.increment(marker, timeout=lock_timeout)
            atomic.increment()
        return iterations

    with TaskExecutor(max_workers=workers) as executor:
        for idx in range(workers):
            executor.submit(f"worker-{idx + 1}", _work, chr(ord("A") + idx % 26))
        executor.wait_all()

    report = SharedStateReport(
        locked_value=shared.value,
        locked_misses=shared.misses,
        atomic_value=atomic.value,
        text_length=len(shared.text),
        expected=workers * iterations,
    )
    logger.info(f"  Shared counter={report.locked_value} (misses={report.locked_misses}), "
                f"atomic counter={report.atomic_value}, expected={report.expected}")
    return report
