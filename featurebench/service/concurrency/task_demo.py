"""
Concurrency chapter: independent blocking workloads on a worker pool,
continuation chaining and shared-state updates from several threads.
"""
from typing import List, Optional

from featurebench.config.settings import PoolSettings, SharedStateSettings
from featurebench.service.concurrency.shared_state import run_shared_state_demo
from featurebench.service.recorder.recorder import Recorder
from featurebench.service.task_executor.task_execute_result import TaskExecuteResult
from featurebench.service.task_executor.task_executor import TaskExecutor, simulated_workload
from featurebench.util.log_config import setup_logger

logger = setup_logger(__name__)


def run_parallel_workloads(durations: List[float], max_workers: int,
                           timeout: Optional[float] = None) -> TaskExecuteResult:
    """Sleep for each duration on its own task and wait for all of them"""
    with TaskExecutor(max_workers=max_workers) as executor:
        for idx, seconds in enumerate(durations, 1):
            executor.submit(f"job-{idx}", simulated_workload, seconds, idx)
        return executor.wait_all(timeout=timeout)


def run_continuation_chain(seed: int = 2, steps: int = 3, delay: float = 0.05) -> int:
    """
    Square ``seed`` once per step, each step a continuation of the last.

    Returns the final value, e.g. seed=2, steps=3 -> 256.
    """
    with TaskExecutor(max_workers=1) as executor:
        future = executor.submit("seed", simulated_workload, delay, seed)
        for step in range(steps):
            future = executor.continue_with(future, lambda v: simulated_workload(delay, v * v),
                                            name=f"square-{step + 1}")
        value = future.result()
        executor.wait_all()
    return value


def run(pool: PoolSettings, shared: SharedStateSettings, recorder: Recorder) -> None:
    total = sum(pool.task_durations)
    print(f"{len(pool.task_durations)} task(s) sleeping {total:.2f}s in total, {pool.max_workers} worker(s):")
    recorder.start()
    result = run_parallel_workloads(pool.task_durations, pool.max_workers, timeout=pool.wait_timeout)
    recorder.stop()
    for outcome in result.outcomes:
        print(f"  {outcome.name}: returned {outcome.value!r} after {outcome.duration_seconds:.3f}s")

    print("Continuation chain 2 -> 4 -> 16 -> 256:", run_continuation_chain())

    report = run_shared_state_demo(shared.iterations, shared.workers, shared.lock_timeout)
    print(f"Locked counter: {report.locked_value:,} (+{report.locked_misses} timed out), "
          f"atomic counter: {report.atomic_value:,}, expected: {report.expected:,}")
    if not report.consistent:
        logger.error(f"Lost updates in shared state demo: {report}")
        raise RuntimeError("Shared state demo lost updates")
