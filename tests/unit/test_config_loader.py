"""
Unit tests for candelabra configuration loading.

Tests cover:
- CandelabraConfig: Validation of granularity lists
- CandelabraConfig.from_env: Environment overrides and defaults
- ConfigLoader: YAML files under <config_dir>/candelabra/
"""

from datetime import timedelta

import pytest

from engine.config.loader import CandelabraConfig, ConfigLoader


def write_config(config_dir, name, text):
    path = config_dir / "candelabra" / f"{name}.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestCandelabraConfig:
    """Tests for CandelabraConfig validation."""

    def test_valid_config_yields_tier_configs(self):
        config = CandelabraConfig(granularities=["1m", "5m", "1d"])

        tiers = config.tier_configs()
        assert [t.name for t in tiers] == ["1m", "5m", "1d"]
        assert tiers[-1].duration == timedelta(days=1)

    def test_empty_list_rejected(self):
        with pytest.raises(ValueError):
            CandelabraConfig(granularities=[])

    def test_unparsable_granularity_rejected(self):
        with pytest.raises(ValueError, match="Invalid granularity"):
            CandelabraConfig(granularities=["1m", "1w"])

    @pytest.mark.parametrize("granularities", [["5m", "1m"], ["1m", "1m"], ["60m", "1h"]])
    def test_durations_must_strictly_increase(self, granularities):
        """Test that equal or decreasing durations are rejected, whatever their spelling."""
        with pytest.raises(ValueError, match="strictly increase"):
            CandelabraConfig(granularities=granularities)


class TestFromEnv:
    """Tests for CandelabraConfig.from_env."""

    def test_default(self, monkeypatch):
        monkeypatch.delenv("CANDELABRA_GRANULARITIES", raising=False)

        assert CandelabraConfig.from_env().granularities == ["1m", "5m", "1h", "1d"]

    def test_override_trims_whitespace(self, monkeypatch):
        monkeypatch.setenv("CANDELABRA_GRANULARITIES", " 1m, 15m ,4h")

        assert CandelabraConfig.from_env().granularities == ["1m", "15m", "4h"]

    def test_custom_prefix(self, monkeypatch):
        monkeypatch.setenv("TICKS_GRANULARITIES", "2m,10m")

        assert CandelabraConfig.from_env(prefix="TICKS").granularities == ["2m", "10m"]

    def test_invalid_override_rejected(self, monkeypatch):
        monkeypatch.setenv("CANDELABRA_GRANULARITIES", "1m,7m")

        with pytest.raises(ValueError):
            CandelabraConfig.from_env()


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_load_returns_tier_configs(self, tmp_path):
        write_config(tmp_path, "intraday", 'granularities: ["1m", "5m", "15m", "1h"]\n')

        tiers = ConfigLoader(tmp_path).load("intraday")

        assert [t.name for t in tiers] == ["1m", "5m", "15m", "1h"]
        assert [t.duration for t in tiers] == [
            timedelta(minutes=1),
            timedelta(minutes=5),
            timedelta(minutes=15),
            timedelta(hours=1),
        ]

    def test_block_style_list(self, tmp_path):
        write_config(tmp_path, "daily", "granularities:\n  - 1h\n  - 1d\n")

        assert [t.name for t in ConfigLoader(tmp_path).load("daily")] == ["1h", "1d"]

    def test_load_config_returns_model(self, tmp_path):
        write_config(tmp_path, "single", "granularities: [1m]\n")

        config = ConfigLoader(tmp_path).load_config("single")

        assert isinstance(config, CandelabraConfig)
        assert config.granularities == ["1m"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match="No candelabra config named: absent"):
            ConfigLoader(tmp_path).load("absent")

    def test_invalid_granularity_reports_file(self, tmp_path):
        path = write_config(tmp_path, "broken", "granularities: [1m, 7m]\n")

        with pytest.raises(ValueError, match=str(path.name)):
            ConfigLoader(tmp_path).load("broken")

    def test_non_mapping_document(self, tmp_path):
        write_config(tmp_path, "scalar", "just a string\n")

        with pytest.raises(ValueError, match="Failed to load"):
            ConfigLoader(tmp_path).load("scalar")

    def test_missing_key(self, tmp_path):
        write_config(tmp_path, "empty", "tiers: [1m]\n")

        with pytest.raises(ValueError, match="Failed to load"):
            ConfigLoader(tmp_path).load("empty")
