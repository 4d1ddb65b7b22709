"""
Tests for configuration loading.
"""

from datetime import time
from pathlib import Path

import pytest
from pydantic import ValidationError

from hostslots.config import AppConfig, AvailabilityRulesConfig, BlackoutConfig, WindowConfig
from hostslots.domain.exceptions import ResourceNotFoundError
from hostslots.domain.models import Blackout, PoolingStrategy

CONFIG_YAML = """
bookings_file: bookings.json
log_level: info
resources:
  - id: studio-a
    name: Studio A
    availability_rules:
      slot_minutes: 60
      buffer_before: 15
      pooling: least_loaded
      windows:
        - host: alice
          days: [monday, Friday]
          start: "09:00"
          end: "17:30"
      blackouts:
        - "2024-07-04"
        - ["2024-12-24", "2024-12-26"]
        - {date: "2025-01-01"}
  - id: darkroom
"""


class TestAppConfig:
    """Tests for AppConfig loading."""

    def test_load_from_yaml(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(CONFIG_YAML, encoding="utf-8")

        config = AppConfig.load_from_yaml(config_path)

        assert config.log_level == "INFO"
        assert config.bookings_file == tmp_path / "bookings.json"
        rules = config.find_resource("studio-a").availability_rules.to_domain()
        assert rules.slot_minutes == 60
        assert rules.buffer_before == 15
        assert rules.buffer_after == 0
        assert rules.max_per_day_per_host == 10
        assert rules.pooling is PoolingStrategy.LEAST_LOADED
        assert rules.windows[0].days == frozenset({"Monday", "Friday"})
        assert rules.windows[0].end == time(17, 30)
        assert rules.blackouts == (
            Blackout(date="2024-07-04"),
            Blackout(range=("2024-12-24", "2024-12-26")),
            Blackout(date="2025-01-01"),
        )

    def test_defaults(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(CONFIG_YAML, encoding="utf-8")

        darkroom = AppConfig.load_from_yaml(config_path).find_resource("darkroom")

        assert darkroom.display_name() == "darkroom"
        rules = darkroom.availability_rules.to_domain()
        assert rules.timezone == "America/New_York"
        assert rules.slot_minutes == 30
        assert rules.pooling is PoolingStrategy.ROUND_ROBIN
        assert rules.windows == ()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("resources: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(config_path)

    def test_non_mapping_root(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(config_path)

    def test_duplicate_resource_ids(self):
        with pytest.raises(ValidationError, match="Duplicate resource id"):
            AppConfig(resources=[{"id": "a"}, {"id": "a"}])

    def test_unknown_resource(self):
        with pytest.raises(ResourceNotFoundError):
            AppConfig().find_resource("nope")


class TestRulesValidation:
    """Tests for rule field validation."""

    def test_unknown_weekday(self):
        with pytest.raises(ValidationError, match="Unknown weekday"):
            WindowConfig(host="alice", days=["Funday"], start="09:00", end="10:00")

    def test_bad_clock(self):
        with pytest.raises(ValidationError, match="HH:MM"):
            WindowConfig(host="alice", days=["Monday"], start="9am", end="10:00")

    @pytest.mark.parametrize("field", ["slot_minutes", "max_per_day_per_host"])
    def test_positive_fields(self, field):
        with pytest.raises(ValidationError):
            AvailabilityRulesConfig(**{field: 0})

    def test_negative_buffer(self):
        with pytest.raises(ValidationError):
            AvailabilityRulesConfig(buffer_after=-5)

    def test_unknown_pooling(self):
        with pytest.raises(ValidationError):
            AvailabilityRulesConfig(pooling="random")

    def test_blackout_shorthands(self):
        assert BlackoutConfig.model_validate("2024-07-04").to_domain() == Blackout(date="2024-07-04")
        assert BlackoutConfig.model_validate(["2024-07-01", "2024-07-02"]).to_domain() == Blackout(
            range=("2024-07-01", "2024-07-02")
        )
