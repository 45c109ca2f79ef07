"""
Worker pool with a wait-all barrier.

Submits independent blocking workloads to a thread pool, chains
continuations onto finished tasks and waits until every submitted task is
done. Task failures are collected into the outcomes instead of being raised
from wait_all().
"""
import concurrent.futures
import threading
import time
from typing import Any, Callable, List, Optional, Tuple

from featurebench.service.task_executor.task_execute_result import TaskExecuteResult, TaskOutcome
from featurebench.util.cal_utils import calculate_stat_summary
from featurebench.util.log_config import setup_logger

logger = setup_logger(__name__)


def simulated_workload(seconds: float, value: Any = None) -> Any:
    """Stand-in for blocking work: sleep, then return ``value``"""
    time.sleep(seconds)
    return value


class TaskExecutor:

    def __init__(self, max_workers: int = 4):
        if max_workers <= 0:
            raise ValueError("max_workers must be positive")
        self.max_workers = max_workers
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="featurebench-worker"
        )
        self._submitted: List[Tuple[str, concurrent.futures.Future]] = []
        self._lock = threading.Lock()
        self._closed = False
        self._batch_started: Optional[float] = None

    def submit(self, name: str, fn: Callable[..., Any], *args, **kwargs) -> concurrent.futures.Future:
        """
        Schedule ``fn(*args, **kwargs)`` on the pool.

        Raises:
            RuntimeError: If the executor has been shut down
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("TaskExecutor has been shut down")
            if self._batch_started is None:
                self._batch_started = time.perf_counter()
            timed = self._executor.submit(self._timed, fn, *args, **kwargs)
            self._submitted.append((name, timed))
        logger.debug(f"Submitted task '{name}'")
        return _UnwrappedFuture(timed)

    def continue_with(self, antecedent: concurrent.futures.Future, fn: Callable[[Any], Any],
                      name: Optional[str] = None) -> concurrent.futures.Future:
        """
        Run ``fn(result)`` once ``antecedent`` completes successfully.

        ``antecedent`` is a future returned by submit() or continue_with(). If
        it failed, the returned future fails with the same exception and
        ``fn`` is never called. The continuation takes part in the next
        wait_all() like any submitted task.
        """
        continuation: concurrent.futures.Future = concurrent.futures.Future()
        continuation.set_running_or_notify_cancel()

        with self._lock:
            if self._closed:
                raise RuntimeError("TaskExecutor has been shut down")
            if self._batch_started is None:
                self._batch_started = time.perf_counter()
            label = name or f"continuation-{len(self._submitted) + 1}"
            self._submitted.append((label, continuation))

        def _chain(done: concurrent.futures.Future) -> None:
            if done.cancelled():
                continuation.set_exception(concurrent.futures.CancelledError())
                return
            error = done.exception()
            if error is not None:
                continuation.set_exception(error)
                return
            previous = done.result()
            try:
                inner = self._executor.submit(self._timed, fn, previous)
            except RuntimeError as exc:
                continuation.set_exception(exc)
                return
            inner.add_done_callback(lambda f: _copy_outcome(f, continuation))

        antecedent.add_done_callback(_chain)
        return _UnwrappedFuture(continuation)

    def wait_all(self, timeout: Optional[float] = None) -> TaskExecuteResult:
        """
        Block until every task submitted so far has finished.

        Raises:
            TimeoutError: If tasks are still running after ``timeout`` seconds
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        outcomes: List[TaskOutcome] = []
        index = 0
        # Tasks submitted while we wait (e.g. continuations) join this batch
        while True:
            with self._lock:
                pending = self._submitted[index:]
            if not pending:
                break
            for name, future in pending:
                remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
                done, _ = concurrent.futures.wait([future], timeout=remaining)
                if not done:
                    logger.error(f"Task '{name}' still running after {timeout}s")
                    raise TimeoutError(f"wait_all timed out after {timeout}s waiting for '{name}'")
                error = concurrent.futures.CancelledError() if future.cancelled() else future.exception()
                if error is not None:
                    logger.warning(f"Task '{name}' failed: {error!r}")
                    outcomes.append(TaskOutcome(name=name, value=None, duration_seconds=0.0, error=error))
                    continue
                duration, value = future.result()
                outcomes.append(TaskOutcome(name=name, value=value, duration_seconds=duration))
            index += len(pending)

        with self._lock:
            started = self._batch_started
            self._submitted = self._submitted[index:]
            self._batch_started = None
        elapsed = 0.0 if started is None else time.perf_counter() - started

        result = TaskExecuteResult(
            outcomes=outcomes,
            elapsed_seconds=elapsed,
            duration=calculate_stat_summary([o.duration_seconds for o in outcomes if o.succeeded]),
        )
        logger.info(f"  {len(outcomes)} task(s) finished in {elapsed:.3f}s "
                    f"({len(result.failed)} failed, workers={self.max_workers})")
        return result

    def shutdown(self, wait: bool = True) -> None:
        """
        Refuse new tasks and release the pool.

        With ``wait=True`` every task submitted so far, continuations
        included, finishes first; continuations still need the pool to run.
        """
        with self._lock:
            self._closed = True
            pending = [future for _, future in self._submitted]
        if wait and pending:
            logger.debug(f"Waiting for {len(pending)} task(s) before shutdown")
            concurrent.futures.wait(pending)
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "TaskExecutor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)

    @staticmethod
    def _timed(fn: Callable[..., Any], *args, **kwargs) -> Tuple[float, Any]:
        started = time.perf_counter()
        value = fn(*args, **kwargs)
        return time.perf_counter() - started, value


def _copy_outcome(source: concurrent.futures.Future, target: concurrent.futures.Future) -> None:
    error = source.exception()
    if error is not None:
        target.set_exception(error)
    else:
        target.set_result(source.result())


class _UnwrappedFuture(concurrent.futures.Future):
    """
    Caller-facing view of a timed future: result() returns the task's value
    instead of the internal (duration, value) pair.

    cancel() is forwarded to the pooled task, so it only succeeds while the
    task is still queued. Continuations cannot be cancelled.
    """

    def __init__(self, inner: concurrent.futures.Future):
        super().__init__()
        self._inner = inner
        inner.add_done_callback(self._settle)

    def cancel(self) -> bool:
        # _settle cancels this view once the inner future reports cancelled
        return self._inner.cancel()

    def _settle(self, inner: concurrent.futures.Future) -> None:
        if inner.cancelled():
            super().cancel()
            self.set_running_or_notify_cancel()
            return
        if not self.set_running_or_notify_cancel():
            return
        error = inner.exception()
        if error is not None:
            self.set_exception(error)
        else:
            self.set_result(inner.result()[1])
