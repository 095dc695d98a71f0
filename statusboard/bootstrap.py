"""Bootstrap helpers that assemble all runtime components."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from .board import Board
from .config import Settings, load_board_config, load_settings
from .logging_setup import LoggerConfig, configure_logging


class BootstrapContext:
    def __init__(self, settings: Settings, board: Board) -> None:
        self.settings = settings
        self.board = board

    def shutdown(self) -> None:
        self.board.stop()


def bootstrap_board(
    base_dir: Path | None = None,
    *,
    element_types: Optional[Mapping[str, Any]] = None,
    segment_types: Optional[Mapping[str, type]] = None,
    start: bool = True,
) -> BootstrapContext:
    settings = load_settings(base_dir)
    configure_logging(LoggerConfig(level=settings.log_level))
    config = load_board_config(settings.board_config_path)
    board = Board(
        config,
        element_types=element_types,
        segment_types=segment_types,
        min_interval=config.get("min_interval", settings.min_interval),
    )
    logging.getLogger("statusboard.bootstrap").info(
        "Board %r ready with %d segment(s), min interval %.3fs",
        board.name,
        len(board.segments),
        board.min_interval,
    )
    if start:
        board.start(settings.tick_interval)
    return BootstrapContext(settings, board)
