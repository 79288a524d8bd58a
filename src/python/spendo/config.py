"""Client configuration resolution."""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Any, Mapping

DEFAULT_BASE_URL = "http://127.0.0.1:8080/api"
DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_DOUBLE_TAP_MS = 300
DEFAULT_CONFIG_PATH = Path("~") / ".spendo" / "config.json"


@dataclass(frozen=True)
class ClientConfig:
    """Connection and interaction settings for the ledger client."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    double_tap_ms: int = DEFAULT_DOUBLE_TAP_MS


def _config_path(environ: Mapping[str, str]) -> Path:
    override = environ.get("SPENDO_CONFIG")
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def _load_file(path: Path) -> dict[str, Any]:
    """Load config file if present, else return empty config."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        return {}
    return payload


def _positive_number(value: Any, label: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label} must be a number") from exc
    if number <= 0:
        raise ValueError(f"{label} must be greater than zero")
    return number


def load_config(
    base_url: str | None = None,
    timeout_seconds: float | None = None,
    environ: Mapping[str, str] | None = None,
) -> ClientConfig:
    """Resolve configuration from arguments, environment and config file.

    Explicit arguments win over ``SPENDO_BASE_URL``/``SPENDO_TIMEOUT``, which
    win over the JSON file named by ``SPENDO_CONFIG`` (default
    ``~/.spendo/config.json``).
    """
    environ = os.environ if environ is None else environ
    file_config = _load_file(_config_path(environ))

    resolved_url = (
        base_url
        or environ.get("SPENDO_BASE_URL")
        or file_config.get("base_url")
        or DEFAULT_BASE_URL
    )
    raw_timeout = (
        timeout_seconds
        if timeout_seconds is not None
        else environ.get("SPENDO_TIMEOUT", file_config.get("timeout", DEFAULT_TIMEOUT_SECONDS))
    )
    raw_window = file_config.get("double_tap_ms", DEFAULT_DOUBLE_TAP_MS)

    return ClientConfig(
        base_url=str(resolved_url).rstrip("/"),
        timeout_seconds=_positive_number(raw_timeout, "timeout"),
        double_tap_ms=int(_positive_number(raw_window, "double_tap_ms")),
    )
