"""Logging configuration for the status board service."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from logging import Logger
from typing import Dict

DEFAULT_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)


@dataclass(slots=True)
class LoggerConfig:
    level: int | str = logging.INFO
    fmt: str = DEFAULT_FORMAT
    enable_console: bool = True


def resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(config: LoggerConfig | None = None) -> Dict[str, Logger]:
    config = config or LoggerConfig()
    level = resolve_level(config.level)
    logging.basicConfig(
        level=level,
        format=config.fmt,
        stream=sys.stdout if config.enable_console else None,
    )
    logging.getLogger("statusboard").setLevel(level)
    logging.debug("Logging initialized with level %s", level)
    return {
        "board": logging.getLogger("statusboard.board"),
        "segment": logging.getLogger("statusboard.segment"),
        "element": logging.getLogger("statusboard.element"),
        "api": logging.getLogger("statusboard.api"),
    }
