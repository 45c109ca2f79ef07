from dataclasses import dataclass


@dataclass(frozen=True)
class MemorySnapshot:
    """Single reading of process memory usage"""
    timestamp: float
    rss_bytes: int  # Resident Set Size (physical memory)
    vms_bytes: int  # Virtual Memory Size (reserved address space)
