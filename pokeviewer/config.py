"""Configuration and logging setup.

Settings come from a small JSON file (``config/config.json`` by default);
every key is optional and falls back to the defaults below.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

DEFAULT_CONFIG_PATH = "config/config.json"
DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"
DEFAULT_SPRITE_BASE_URL = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon"
)
DEFAULT_CATALOG_SIZE = 20
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_CHAIN_DEPTH = 10

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    sprite_base_url: str = DEFAULT_SPRITE_BASE_URL
    catalog_size: int = DEFAULT_CATALOG_SIZE
    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_chain_depth: int = DEFAULT_MAX_CHAIN_DEPTH
    log_level: str = "WARNING"


def read_json(path: str) -> Optional[Dict[str, Any]]:
    """Read JSON from disk; return None if missing or invalid."""
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return None
    return data if isinstance(data, dict) else None


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load JSON configuration from ``config_path``.

    Raises ``RuntimeError`` if the file is missing or invalid.
    """
    data = read_json(config_path)
    if data is None:
        raise RuntimeError(f"Missing or invalid config: {config_path}")
    return data


def settings_from_config(cfg: Dict[str, Any]) -> Settings:
    """Build ``Settings`` from a loaded config dict, applying defaults."""
    catalog_size = int(cfg.get("catalog_size", DEFAULT_CATALOG_SIZE))
    if catalog_size < 1:
        raise RuntimeError(f"catalog_size must be positive, got {catalog_size}")
    max_depth = int(cfg.get("max_chain_depth", DEFAULT_MAX_CHAIN_DEPTH))
    if max_depth < 1:
        raise RuntimeError(f"max_chain_depth must be positive, got {max_depth}")

    return Settings(
        base_url=str(cfg.get("pokeapi_base_url", DEFAULT_BASE_URL)).rstrip("/"),
        sprite_base_url=str(
            cfg.get("sprite_base_url", DEFAULT_SPRITE_BASE_URL)
        ).rstrip("/"),
        catalog_size=catalog_size,
        request_timeout_seconds=float(
            cfg.get("request_timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
        ),
        max_chain_depth=max_depth,
        log_level=str(cfg.get("log_level", "WARNING")).upper(),
    )


def configure_logging(level: str = "WARNING") -> None:
    """Send log records to stderr at ``level``."""
    numeric = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
