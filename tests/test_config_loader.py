"""Tests for YAML configuration loading."""

import pytest

from featurebench.config.config_loader import DEFAULT_CONFIG_PATH, ConfigLoader, parse_chapters
from featurebench.consts.ChapterType import ChapterType


class TestConfigLoader:

    def test_base_config(self, config_dir):
        config = ConfigLoader(config_dir).config_data
        assert config.chapters == [ChapterType.OPERATORS, ChapterType.STRINGS, ChapterType.COMPARISON]
        assert config.log_level == "INFO"
        assert config.output_cwd is None
        assert config.recorder.collect_garbage is False
        assert config.recorder.echo is True
        assert config.pool.max_workers == 3
        assert config.pool.task_durations == [0.01, 0.02]
        assert config.comparison.workloads == ["join", "string_io"]
        assert config.shared_state.iterations == 1000

    def test_env_override_replaces_sections(self, config_dir):
        config = ConfigLoader(config_dir, env="dev").config_data
        assert config.chapters == [ChapterType.CONVERSION]
        assert config.pool.max_workers == 1
        # Whole section replaced: task_durations falls back to the default
        assert config.pool.task_durations == [0.5, 0.5, 0.5, 0.5]
        assert config.comparison.repeat == 2

    def test_missing_env_file(self, config_dir):
        with pytest.raises(FileNotFoundError):
            ConfigLoader(config_dir, env="prod")

    def test_missing_config_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader(tmp_path / "nowhere")

    def test_missing_chapters_key(self, tmp_path):
        (tmp_path / "config.yaml").write_text("log_level: INFO\n", encoding="utf-8")
        with pytest.raises(KeyError):
            ConfigLoader(tmp_path)

    def test_unknown_chapter(self, tmp_path):
        (tmp_path / "config.yaml").write_text("chapters: [pointers]\n", encoding="utf-8")
        with pytest.raises(ValueError, match="pointers"):
            ConfigLoader(tmp_path)

    def test_invalid_values(self, tmp_path):
        (tmp_path / "config.yaml").write_text("chapters: []\npool:\n  max_workers: 0\n", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigLoader(tmp_path)
        (tmp_path / "config.yaml").write_text("chapters: []\nlog_level: loud\n", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigLoader(tmp_path)

    def test_unknown_setting_key(self, tmp_path):
        (tmp_path / "config.yaml").write_text("chapters: []\nrecorder:\n  colour: red\n", encoding="utf-8")
        with pytest.raises(TypeError):
            ConfigLoader(tmp_path)

    def test_select_chapters(self, config_dir):
        loader = ConfigLoader(config_dir)
        assert loader.select_chapters() == loader.config_data.chapters
        assert loader.select_chapters(["strings", "operators"]) == [ChapterType.STRINGS, ChapterType.OPERATORS]

    def test_bundled_configs_load(self):
        assert ConfigLoader(DEFAULT_CONFIG_PATH).config_data.chapters == list(ChapterType)
        assert ConfigLoader(DEFAULT_CONFIG_PATH, env="dev").config_data.log_level == "DEBUG"

    def test_parse_chapters(self):
        assert parse_chapters(["concurrency"]) == [ChapterType.CONCURRENCY]
