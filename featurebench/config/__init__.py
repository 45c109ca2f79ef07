"""Configuration module for lesson runs."""

from .config_loader import ConfigLoader
from .lesson_config import LessonConfig
from .settings import ComparisonSettings, PoolSettings, RecorderSettings, SharedStateSettings

__all__ = [
    "ComparisonSettings",
    "ConfigLoader",
    "LessonConfig",
    "PoolSettings",
    "RecorderSettings",
    "SharedStateSettings",
]
