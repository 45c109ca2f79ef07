"""Worker pool with a wait-all barrier."""

from .task_execute_result import TaskExecuteResult, TaskOutcome
from .task_executor import TaskExecutor, simulated_workload

__all__ = ["TaskExecuteResult", "TaskExecutor", "TaskOutcome", "simulated_workload"]
