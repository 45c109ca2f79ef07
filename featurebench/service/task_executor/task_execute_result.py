import dataclasses
from typing import Any, List, Optional

from featurebench.models.stat_summary import StatSummary


@dataclasses.dataclass
class TaskOutcome:
    """Result of one task submitted to the TaskExecutor"""
    name: str
    value: Any
    duration_seconds: float
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self):
        """Convert to dictionary for JSON serialization"""
        return {
            "name": self.name,
            "value": repr(self.value),
            "duration_seconds": self.duration_seconds,
            "error": None if self.error is None else repr(self.error),
        }


@dataclasses.dataclass
class TaskExecuteResult:
    """All outcomes of one wait_all() barrier, in submission order"""
    outcomes: List[TaskOutcome]
    elapsed_seconds: float
    duration: StatSummary

    @property
    def failed(self) -> List[TaskOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    @property
    def values(self) -> List[Any]:
        return [o.value for o in self.outcomes if o.succeeded]

    def to_summary_dict(self):
        """Convert to dictionary for JSON serialization"""
        return {
            "tasks": len(self.outcomes),
            "failed": len(self.failed),
            "elapsed_seconds": self.elapsed_seconds,
            "duration": self.duration.to_summary_dict(),
        }
