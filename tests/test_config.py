"""Tests for tracker config loading."""

import pytest
from pathlib import Path
from tablestate.config import TrackerConfig, LoggingConfig, load_config
from tablestate.state import TableState

EXAMPLE_CONFIG = Path(__file__).resolve().parent.parent / "table.yaml.example"


class TestTrackerConfigFields:
    def test_defaults(self):
        tc = TrackerConfig()
        assert tc.inactive_seat_state == 4
        assert tc.default_countdown == 30
        assert tc.hero_user_id is None
        assert tc.logging == LoggingConfig(level="WARNING")

    def test_table_uses_defaults_without_config(self):
        assert TableState().config == TrackerConfig()


class TestLoadConfig:
    def test_example_config_loads(self):
        config = load_config(EXAMPLE_CONFIG)
        assert config == TrackerConfig()

    def test_custom_values(self, tmp_path):
        path = tmp_path / "table.yaml"
        path.write_text(
            "tracker:\n"
            "  inactive_seat_state: 7\n"
            "  default_countdown: 15\n"
            "  hero_user_id: me-123\n"
            "logging:\n"
            "  level: debug\n"
        )
        config = load_config(path)
        assert config.inactive_seat_state == 7
        assert config.default_countdown == 15
        assert config.hero_user_id == "me-123"
        assert config.logging.level == "DEBUG"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == TrackerConfig()

    def test_partial_sections(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("tracker:\n  default_countdown: 45\n")
        config = load_config(path)
        assert config.default_countdown == 45
        assert config.inactive_seat_state == 4

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_bad_number_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("tracker:\n  default_countdown: soon\n")
        with pytest.raises(ValueError):
            load_config(path)
