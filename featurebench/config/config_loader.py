"""
Configuration loader for featurebench.

Reads config.yaml from the config directory and, when an environment name is
given, merges config_<env>.yaml on top of it.
"""
from pathlib import Path
from typing import List, Optional

import yaml

from featurebench.config.lesson_config import LessonConfig
from featurebench.config.settings import ComparisonSettings, PoolSettings, RecorderSettings, SharedStateSettings
from featurebench.consts.ChapterType import ChapterType
from featurebench.util.log_config import setup_logger

logger = setup_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config_yaml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigLoader:

    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH, env: Optional[str] = None):
        self.config_path = Path(config_path)
        self.env = env
        self.config_data = self._load_config()

    def _load_config(self) -> LessonConfig:
        """
        Load and parse lesson configuration from YAML file.
        Supports environment-specific overrides via config_<env>.yaml

        Returns:
            LessonConfig: Parsed configuration

        Raises:
            FileNotFoundError: If config.yaml or the env override is missing
            KeyError: If the required 'chapters' key is missing
            ValueError: If a chapter name is unknown
        """
        data = self._read_yaml(self.config_path / "config.yaml")

        if self.env:
            env_data = self._read_yaml(self.config_path / f"config_{self.env}.yaml")
            # Top-level sections are replaced wholesale, not deep-merged
            data.update(env_data)
            logger.debug(f"Applied environment override '{self.env}': {sorted(env_data)}")

        config = LessonConfig()
        config.chapters = parse_chapters(data["chapters"])
        config.log_level = str(data.get("log_level", "INFO")).upper()
        config.output_cwd = data.get("output_cwd")
        config.recorder = RecorderSettings(**(data.get("recorder") or {}))
        config.pool = PoolSettings(**(data.get("pool") or {}))
        config.shared_state = SharedStateSettings(**(data.get("shared_state") or {}))
        config.comparison = ComparisonSettings(**(data.get("comparison") or {}))

        if config.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log_level '{config.log_level}' (expected one of: {', '.join(LOG_LEVELS)})")
        if config.pool.max_workers <= 0:
            raise ValueError("pool.max_workers must be positive")
        if config.comparison.repeat <= 0:
            raise ValueError("comparison.repeat must be positive")

        return config

    @staticmethod
    def _read_yaml(path: Path) -> dict:
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def select_chapters(self, names: Optional[List[str]] = None) -> List[ChapterType]:
        """
        Chapters to run: the named ones in the given order, or all configured
        chapters when no names are passed.
        """
        if not names:
            return list(self.config_data.chapters)
        return parse_chapters(names)


def parse_chapters(names: List[str]) -> List[ChapterType]:
    chapters = []
    for name in names:
        try:
            chapters.append(ChapterType(name))
        except ValueError:
            valid = ", ".join(c.value for c in ChapterType)
            raise ValueError(f"Unknown chapter '{name}' (expected one of: {valid})") from None
    return chapters


if __name__ == "__main__":

    # python3 -m featurebench.config.config_loader

    config = ConfigLoader(env="dev")
    print(vars(config.config_data))
