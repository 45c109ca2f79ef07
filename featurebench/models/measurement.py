"""Recorder data models."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class MeasurementBaseline:
    """
    Timer start point and memory readings captured by ``Recorder.start``.

    ``started_at`` is a value of the recorder's monotonic clock, not a
    wall-clock timestamp.
    """
    started_at: float
    rss_bytes: int
    vms_bytes: int


@dataclass(frozen=True)
class MeasurementResult:
    """
    Deltas reported by ``Recorder.stop`` relative to the last baseline.

    Memory deltas are signed: memory released during the measured region
    shows up as a negative number.
    """
    rss_delta_bytes: int
    vms_delta_bytes: int
    elapsed_seconds: float
    label: Optional[str] = None

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_seconds * 1000

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'label': self.label,
            'rss_delta_bytes': self.rss_delta_bytes,
            'vms_delta_bytes': self.vms_delta_bytes,
            'elapsed_seconds': self.elapsed_seconds,
            'elapsed_ms': self.elapsed_ms,
        }
