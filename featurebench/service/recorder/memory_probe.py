"""
Process memory probe.

Reads the resident and virtual memory size of a process through psutil.
"""
import os
import time
from typing import Optional

import psutil

from featurebench.service.recorder.memory_snapshot import MemorySnapshot


class MemoryProbe:
    """Interface for memory probes."""

    def snapshot(self) -> MemorySnapshot:
        raise NotImplementedError


class PsutilMemoryProbe(MemoryProbe):
    """Read RSS/VMS of a process (the current one by default) via psutil"""

    def __init__(self, pid: Optional[int] = None):
        """
        Initialize the probe.

        Args:
            pid: Process ID to read (default: current process)

        Raises:
            psutil.NoSuchProcess: If no process with that pid exists
        """
        self.pid = pid if pid is not None else os.getpid()
        self.process = psutil.Process(self.pid)

    def snapshot(self) -> MemorySnapshot:
        mem_info = self.process.memory_info()
        return MemorySnapshot(
            timestamp=time.time(),
            rss_bytes=mem_info.rss,
            vms_bytes=mem_info.vms
        )


def get_default_memory_probe() -> MemoryProbe:
    return PsutilMemoryProbe()
