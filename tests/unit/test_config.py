from __future__ import annotations

import json

import pytest

from spendo.config import DEFAULT_BASE_URL, ClientConfig, load_config


def test_defaults_without_file(tmp_path) -> None:
    config = load_config(environ={"SPENDO_CONFIG": str(tmp_path / "missing.json")})

    assert config == ClientConfig()
    assert config.base_url == DEFAULT_BASE_URL


def test_file_values(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"base_url": "http://ledger.local/api/", "timeout": 9, "double_tap_ms": 400}),
        encoding="utf-8",
    )

    config = load_config(environ={"SPENDO_CONFIG": str(path)})

    assert config.base_url == "http://ledger.local/api"
    assert config.timeout_seconds == 9
    assert config.double_tap_ms == 400


def test_precedence(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"base_url": "http://file/api", "timeout": 9}), encoding="utf-8")
    environ = {
        "SPENDO_CONFIG": str(path),
        "SPENDO_BASE_URL": "http://env/api",
        "SPENDO_TIMEOUT": "3",
    }

    from_env = load_config(environ=environ)
    explicit = load_config(base_url="http://arg/api", timeout_seconds=1.5, environ=environ)

    assert (from_env.base_url, from_env.timeout_seconds) == ("http://env/api", 3)
    assert (explicit.base_url, explicit.timeout_seconds) == ("http://arg/api", 1.5)


def test_non_object_file_is_ignored(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert load_config(environ={"SPENDO_CONFIG": str(path)}) == ClientConfig()


def test_invalid_timeout_rejected(tmp_path) -> None:
    environ = {"SPENDO_CONFIG": str(tmp_path / "none.json"), "SPENDO_TIMEOUT": "soon"}

    with pytest.raises(ValueError):
        load_config(environ=environ)
