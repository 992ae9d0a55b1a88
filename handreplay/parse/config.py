"""
Configuration loader for the hand history parser
"""
import logging
from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_CFG = Path(__file__).parent / "config.yml"


class ParserConfig(BaseModel):
    """Parser tunables; the defaults match PokerStars transcripts."""
    epsilon: float = 0.01                   # Tolerance for pot amount comparisons
    default_max_seats: int = 9
    default_button_seat: int = 1
    unknown_stakes_label: str = "Unknown"
    timeout_reason: str = "Player timed out"
    disconnect_reason: str = "Player disconnected"
    warn_on_pot_mismatch: bool = True


def load_config(path: Union[str, Path] = DEFAULT_CFG) -> ParserConfig:
    """
    Load and validate parser configuration from a YAML file

    Args:
        path: Path to configuration file

    Returns:
        Validated ParserConfig
    """
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    config = ParserConfig.model_validate(cfg.get("parser", cfg))
    logger.info(f"Loaded config from {path}")
    return config


def save_config(config: ParserConfig, path: Union[str, Path] = DEFAULT_CFG) -> None:
    """
    Save configuration to YAML file

    Args:
        config: Configuration to write
        path: Path to save file
    """
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump({"parser": config.model_dump()}, f, sort_keys=False, allow_unicode=True)
    logger.info(f"Saved config to {path}")
