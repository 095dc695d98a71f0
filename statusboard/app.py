"""Flask application entry point for the status board."""

from __future__ import annotations

import atexit

from flask import Flask

from .api.routes import create_blueprint
from .bootstrap import BootstrapContext, bootstrap_board


def create_app(ctx: BootstrapContext | None = None) -> Flask:
    ctx = ctx or bootstrap_board()
    prefix = ctx.settings.server.url_prefix
    app = Flask(__name__)
    app.config["STATUSBOARD_SETTINGS"] = ctx.settings
    app.extensions["statusboard"] = ctx.board
    app.register_blueprint(create_blueprint(ctx.board, base_url=prefix), url_prefix=prefix or None)
    atexit.register(ctx.shutdown)
    return app


if __name__ == "__main__":
    context = bootstrap_board()
    app = create_app(context)
    app.run(host=context.settings.server.host, port=context.settings.server.port)
