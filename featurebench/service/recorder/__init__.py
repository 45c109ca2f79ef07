"""Elapsed time and process memory recorder."""

from .memory_probe import MemoryProbe, PsutilMemoryProbe, get_default_memory_probe
from .memory_snapshot import MemorySnapshot
from .recorder import Recorder, format_report

__all__ = [
    "MemoryProbe",
    "MemorySnapshot",
    "PsutilMemoryProbe",
    "Recorder",
    "format_report",
    "get_default_memory_probe",
]
