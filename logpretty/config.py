"""Configuration module — frozen dataclass loaded from environment variables,
plus an optional YAML file of palette overrides."""

import logging
import os
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    concise: bool = False
    color: str = "auto"
    on_bad_timestamp: str = "abort"
    palette_path: str | None = None


def load_config() -> Config:
    """Build Config from environment variables with sensible defaults."""
    return Config(
        concise=_parse_bool(os.environ.get("LOGPRETTY_CONCISE", "false")),
        color=os.environ.get("LOGPRETTY_COLOR", Config.color).strip().lower(),
        on_bad_timestamp=os.environ.get(
            "LOGPRETTY_ON_BAD_TIMESTAMP", Config.on_bad_timestamp
        ).strip().lower(),
        palette_path=os.environ.get("LOGPRETTY_PALETTE") or Config.palette_path,
    )


def load_palette_overrides(path: str | None) -> dict[str, str]:
    """Read a YAML mapping of palette slot -> color name or escape sequence.

    A missing or malformed file falls back to the built-in palette.
    """
    if path is None:
        return {}

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("Palette file %s not found, using default colors", path)
        return {}
    except yaml.YAMLError:
        logger.warning("Invalid YAML in %s, using default colors", path)
        return {}

    if not isinstance(data, dict):
        logger.warning("Palette file %s is not a mapping, ignoring it", path)
        return {}

    return {str(slot): str(color) for slot, color in data.items()}
