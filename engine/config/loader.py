"""
Config Loader

Loads candelabra tier configurations from YAML files or the environment.
Converts granularity lists to TierConfig objects for candelabra construction.
"""

import os
import yaml
from pathlib import Path
from typing import List
from pydantic import BaseModel, Field, field_validator
import logging

from schemas.candelabra import TierConfig
from .granularity import parse_granularities

logger = logging.getLogger(__name__)

DEFAULT_GRANULARITIES = "1m,5m,1h,1d"


class CandelabraConfig(BaseModel):
    """Tier layout of a candelabra, finest granularity first"""
    granularities: List[str] = Field(min_length=1)

    @field_validator("granularities")
    @classmethod
    def check_granularities(cls, value: List[str]) -> List[str]:
        """Every granularity must parse, and durations must strictly increase"""
        tiers = parse_granularities(value)

        for finer, coarser in zip(tiers, tiers[1:]):
            if coarser.duration <= finer.duration:
                raise ValueError(
                    f"Granularities must strictly increase: "
                    f"{coarser.name} follows {finer.name}"
                )

        return value

    def tier_configs(self) -> List[TierConfig]:
        """Parsed tier configurations in declared order"""
        return parse_granularities(self.granularities)

    @classmethod
    def from_env(cls, prefix: str = "CANDELABRA") -> "CandelabraConfig":
        """Create config from environment variables"""
        raw = os.getenv(f"{prefix}_GRANULARITIES", DEFAULT_GRANULARITIES)
        return cls(granularities=[g.strip() for g in raw.split(",") if g.strip()])


class ConfigLoader:
    """
    Loads candelabra configs from YAML.

    Each config lives in its own file under <config_dir>/candelabra/:

        # config/candelabra/intraday.yaml
        granularities: ["1m", "5m", "15m", "1h"]

    Example usage:
        loader = ConfigLoader(Path("config"))
        tier_configs = loader.load("intraday")

        state = create(seed, tier_configs)
    """

    def __init__(self, config_dir: Path):
        """
        Initialize loader with config directory.

        Args:
            config_dir: Root config directory (contains candelabra/ subdirectory)
        """
        self.config_dir = Path(config_dir)
        logger.info(f"Initialized ConfigLoader with config_dir: {config_dir}")

    def load_config(self, name: str) -> CandelabraConfig:
        """
        Load and validate a named config file.

        Args:
            name: Config name (file stem, e.g. "intraday")

        Returns:
            Validated CandelabraConfig

        Raises:
            ValueError: If the file is missing, malformed or fails validation
        """
        yaml_file = self.config_dir / "candelabra" / f"{name}.yaml"

        if not yaml_file.exists():
            raise ValueError(
                f"No candelabra config named: {name}. "
                f"Expected: {yaml_file}"
            )

        try:
            with open(yaml_file) as f:
                raw = yaml.safe_load(f)
                if not isinstance(raw, dict):
                    raise ValueError("expected a mapping with a 'granularities' key")
                config = CandelabraConfig(**raw)

        except Exception as e:
            logger.error(f"Failed to load {yaml_file}: {e}")
            raise ValueError(f"Failed to load {yaml_file}: {e}")

        if len(config.granularities) == 1:
            logger.warning(
                f"Config {name} declares a single tier; "
                f"it is both the finest and the coarsest"
            )

        logger.info(f"Loaded candelabra config {name}: {config.granularities}")
        return config

    def load(self, name: str) -> List[TierConfig]:
        """
        Load a named config file as tier configurations.

        Args:
            name: Config name (file stem, e.g. "intraday")

        Returns:
            List of TierConfig objects, finest first

        Raises:
            ValueError: If the file is missing, malformed or fails validation
        """
        return self.load_config(name).tier_configs()
