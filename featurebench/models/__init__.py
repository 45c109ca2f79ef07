"""Models for recorder and lesson data structures."""

from .measurement import MeasurementBaseline, MeasurementResult
from .stat_summary import StatSummary

__all__ = ["MeasurementBaseline", "MeasurementResult", "StatSummary"]
