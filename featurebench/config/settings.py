"""
Per-chapter settings data classes.

Each section of config.yaml maps onto one of these; missing keys fall back
to the defaults below.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RecorderSettings:

    collect_garbage: bool = True
    echo: bool = True


@dataclass
class PoolSettings:

    max_workers: int = 4
    task_durations: List[float] = field(default_factory=lambda: [0.5, 0.5, 0.5, 0.5])
    wait_timeout: Optional[float] = None


@dataclass
class SharedStateSettings:

    iterations: int = 1000
    workers: int = 2
    lock_timeout: float = 1.0


@dataclass
class ComparisonSettings:

    repeat: int = 5
    string_parts: int = 20000
    workloads: List[str] = field(default_factory=lambda: ["concatenation", "join", "string_io"])
