"""Command line interface for the status board."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from .bootstrap import bootstrap_board
from .errors import ConfigurationError


def _print(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _base_dir(args) -> Path | None:
    return Path(args.base_dir) if args.base_dir else None


def cmd_runserver(args):
    from .app import create_app

    ctx = bootstrap_board(_base_dir(args))
    app = create_app(ctx)
    app.run(
        host=args.host or ctx.settings.server.host,
        port=args.port or ctx.settings.server.port,
    )


def cmd_show(args):
    ctx = bootstrap_board(_base_dir(args), start=False)
    board = ctx.board
    _print(
        {
            "name": board.name,
            "segments": [
                {
                    "index": index,
                    "name": segment.name,
                    "class_name": type(segment).__name__,
                    "checksum": segment.checksum,
                    "elements": [
                        element.render("object") if element is not None else None
                        for element in segment.elements
                    ],
                }
                for index, segment in enumerate(board.segments)
            ],
        }
    )


def cmd_validate(args):
    try:
        ctx = bootstrap_board(_base_dir(args), start=False)
    except ConfigurationError as exc:
        _print({"ok": False, "error": str(exc)})
        return 1
    _print({"ok": True, "name": ctx.board.name, "segments": len(ctx.board.segments)})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Status board CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    runserver = sub.add_parser("runserver", help="Start HTTP server")
    runserver.add_argument("--host")
    runserver.add_argument("--port", type=int)
    runserver.add_argument("--base-dir")
    runserver.set_defaults(func=cmd_runserver)

    show = sub.add_parser("show", help="Print the configured board")
    show.add_argument("--base-dir")
    show.set_defaults(func=cmd_show)

    validate = sub.add_parser("validate", help="Check the board configuration")
    validate.add_argument("--base-dir")
    validate.set_defaults(func=cmd_validate)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args) or 0


if __name__ == "__main__":
    sys.exit(main())
