"""
Runs named workloads repeatedly under a Recorder and aggregates the
measurements per workload.
"""
from typing import Any, Callable, Dict, Optional

from featurebench.service.comparison.comparison_result import ComparisonResult, WorkloadSummary
from featurebench.service.recorder.recorder import Recorder
from featurebench.util.cal_utils import calculate_stat_summary
from featurebench.util.format_utils import format_megabytes
from featurebench.util.log_config import setup_logger

logger = setup_logger(__name__)


class ComparisonRunner:

    def __init__(
        self,
        workloads: Dict[str, Callable[[], Any]],
        repeat: int = 5,
        recorder_factory: Optional[Callable[[str], Recorder]] = None,
    ):
        if repeat <= 0:
            raise ValueError("repeat must be positive")
        self.workloads = workloads
        self.repeat = repeat
        self.recorder_factory = recorder_factory or (lambda name: Recorder(echo=False, label=name))

    def run(self) -> ComparisonResult:
        summaries = []
        for idx, (name, workload) in enumerate(self.workloads.items(), 1):
            logger.info(f"Workload {idx}/{len(self.workloads)}: {name} ({self.repeat} run(s))")
            summaries.append(self._run_workload(name, workload))
        return ComparisonResult(workloads=summaries)

    def _run_workload(self, name: str, workload: Callable[[], Any]) -> WorkloadSummary:
        recorder = self.recorder_factory(name)
        runs = []
        for i in range(self.repeat):
            recorder.start()
            # Keep the output alive until stop() so its memory is counted
            output = workload()
            result = recorder.stop()
            del output
            logger.debug(f"  Run {i + 1}/{self.repeat}: {result.elapsed_ms:.3f}ms, "
                         f"RSS delta={format_megabytes(result.rss_delta_bytes)}")
            runs.append(result)

        summary = WorkloadSummary(
            name=name,
            runs=runs,
            elapsed_ms=calculate_stat_summary([r.elapsed_ms for r in runs]),
            rss_delta_bytes=calculate_stat_summary([r.rss_delta_bytes for r in runs]),
            vms_delta_bytes=calculate_stat_summary([r.vms_delta_bytes for r in runs]),
        )
        logger.info(f"  → Avg={summary.elapsed_ms.avg:.3f}ms, "
                    f"P50={summary.elapsed_ms.p50:.3f}ms, "
                    f"Max={summary.elapsed_ms.max:.3f}ms, "
                    f"Avg RSS delta={format_megabytes(summary.rss_delta_bytes.avg)}")
        return summary
