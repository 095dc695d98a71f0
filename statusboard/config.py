"""Configuration helpers for the status board service.

Runtime settings come from the environment (optionally seeded from a
``.env`` file in the base directory); the board topology itself lives in a
JSON document referenced by ``STATUSBOARD_CONFIG``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from .errors import ConfigurationError

LOGGER = logging.getLogger("statusboard.config")


def _env(key: str, default: str) -> str:
    value = os.getenv(key, default)
    return value.strip() if isinstance(value, str) else default


def _env_int(key: str, default: int) -> int:
    try:
        return int(_env(key, str(default)))
    except ValueError:
        return default


def _env_float(key: str, default: float) -> float:
    try:
        return float(_env(key, str(default)))
    except ValueError:
        return default


def _load_dotenv(base_dir: Path) -> None:
    env_path = base_dir / ".env"
    if env_path.exists():
        load_dotenv(env_path)


@dataclass(slots=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8060
    url_prefix: str = "/api"


@dataclass(slots=True)
class Settings:
    base_dir: Path
    board_config_path: Path | None = None
    min_interval: float = 0.5
    tick_interval: float = 0.1
    log_level: str = "INFO"
    server: ServerConfig = field(default_factory=ServerConfig)


def load_settings(base_dir: Path | None = None) -> Settings:
    base_dir = base_dir or Path(os.getenv("STATUSBOARD_HOME", Path.cwd()))
    _load_dotenv(base_dir)

    config_path = _env("STATUSBOARD_CONFIG", "")
    board_config_path = None
    if config_path:
        board_config_path = Path(config_path).expanduser()
        if not board_config_path.is_absolute():
            board_config_path = base_dir / board_config_path

    server = ServerConfig(
        host=_env("STATUSBOARD_HOST", "0.0.0.0"),
        port=_env_int("STATUSBOARD_PORT", 8060),
        url_prefix=_env("STATUSBOARD_URL_PREFIX", "/api").rstrip("/"),
    )
    return Settings(
        base_dir=base_dir,
        board_config_path=board_config_path,
        min_interval=max(0.0, _env_float("STATUSBOARD_MIN_INTERVAL", 0.5)),
        tick_interval=max(0.001, _env_float("STATUSBOARD_TICK_INTERVAL", 0.1)),
        log_level=_env("STATUSBOARD_LOG_LEVEL", "INFO").upper(),
        server=server,
    )


def load_board_config(path: Path | None) -> Dict[str, Any]:
    """Read a board topology document; an absent path yields an empty board."""
    if path is None:
        return {}
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Board config {path} does not exist.") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Board config {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Board config {path} must contain a JSON object.")
    if not isinstance(data.get("segments", []), list):
        raise ConfigurationError(f"Board config {path}: 'segments' must be a list.")
    LOGGER.debug("Loaded board config %s with %d segment(s)", path, len(data.get("segments", [])))
    return data
