import dataclasses
import json
from pathlib import Path
from typing import Dict, List

import pandas as pd
from tabulate import tabulate

from featurebench.models.measurement import MeasurementResult
from featurebench.models.stat_summary import StatSummary


@dataclasses.dataclass
class WorkloadSummary:
    """Aggregated measurements of one workload over all repeats"""
    name: str
    runs: List[MeasurementResult]
    elapsed_ms: StatSummary
    rss_delta_bytes: StatSummary
    vms_delta_bytes: StatSummary

    def to_summary_dict(self):
        return {
            "elapsed_ms": self.elapsed_ms.to_summary_dict(),
            "rss_delta_bytes": self.rss_delta_bytes.to_summary_dict(),
            "vms_delta_bytes": self.vms_delta_bytes.to_summary_dict(),
            "repeat": len(self.runs),
        }

    def to_raw_data_dict(self):
        return {
            "elapsed_ms": self.elapsed_ms.to_raw_data_dict(),
            "rss_delta_bytes": self.rss_delta_bytes.to_raw_data_dict(),
            "vms_delta_bytes": self.vms_delta_bytes.to_raw_data_dict(),
            "repeat": len(self.runs),
        }


@dataclasses.dataclass
class ComparisonResult:
    workloads: List[WorkloadSummary]

    def fastest(self) -> WorkloadSummary:
        if not self.workloads:
            raise ValueError("No workloads were measured")
        return min(self.workloads, key=lambda w: w.elapsed_ms.avg)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per (workload, run)"""
        rows = []
        for workload in self.workloads:
            for idx, run in enumerate(workload.runs, 1):
                row = run.to_dict()
                row["workload"] = workload.name
                row["run"] = idx
                rows.append(row)
        columns = ["workload", "run", "elapsed_ms", "elapsed_seconds", "rss_delta_bytes", "vms_delta_bytes"]
        return pd.DataFrame(rows, columns=columns)

    def to_summary_dict(self) -> Dict[str, Dict]:
        return {w.name: w.to_summary_dict() for w in self.workloads}

    def to_raw_data_dict(self) -> Dict[str, Dict]:
        return {w.name: w.to_raw_data_dict() for w in self.workloads}

    def format_table(self) -> str:
        headers = ["workload", "avg ms", "p50 ms", "max ms", "avg RSS delta", "max RSS delta"]
        records = [
            [
                w.name,
                f"{w.elapsed_ms.avg:,.3f}",
                f"{w.elapsed_ms.p50:,.3f}",
                f"{w.elapsed_ms.max:,.3f}",
                f"{w.rss_delta_bytes.avg:,.0f}",
                f"{w.rss_delta_bytes.max:,.0f}",
            ]
            for w in self.workloads
        ]
        return tabulate(records, headers=headers, tablefmt="github", stralign="left", numalign="right")

    def save(self, out_dir: Path) -> Dict[str, Path]:
        """
        Write comparison.csv (every run), summary.json (statistics) and
        raw_data.json (per-workload measurement series) to out_dir
        """
        out_dir.mkdir(parents=True, exist_ok=True)
        csv_path = out_dir / "comparison.csv"
        summary_path = out_dir / "summary.json"
        raw_data_path = out_dir / "raw_data.json"
        self.to_dataframe().to_csv(csv_path, index=False)
        with open(summary_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_summary_dict(), f, indent=2)
        with open(raw_data_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_raw_data_dict(), f, indent=2)
        return {"csv": csv_path, "summary": summary_path, "raw_data": raw_data_path}
