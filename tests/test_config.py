"""Tests for config loading."""

from __future__ import annotations

import json

import pytest

from pokeviewer.config import (
    DEFAULT_BASE_URL,
    Settings,
    load_config,
    settings_from_config,
)


def test_load_config_missing_file_raises(tmp_path) -> None:
    with pytest.raises(RuntimeError):
        load_config(str(tmp_path / "nope.json"))


def test_load_config_invalid_json_raises(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(RuntimeError):
        load_config(str(path))


def test_settings_defaults() -> None:
    settings = settings_from_config({})
    assert settings == Settings()
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.catalog_size == 20
    assert settings.max_chain_depth == 10


def test_settings_from_file(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "pokeapi_base_url": "https://pokeapi.test/api/v2/",
                "catalog_size": 5,
                "request_timeout_seconds": 2,
                "log_level": "debug",
            }
        ),
        encoding="utf-8",
    )
    settings = settings_from_config(load_config(str(path)))
    assert settings.base_url == "https://pokeapi.test/api/v2"
    assert settings.catalog_size == 5
    assert settings.request_timeout_seconds == 2.0
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("key", ["catalog_size", "max_chain_depth"])
def test_settings_reject_non_positive(key: str) -> None:
    with pytest.raises(RuntimeError):
        settings_from_config({key: 0})
