"""Flask server for the RoPaSci game.

``create_app`` wires one :class:`GameControl.GameStateMachine` into a Flask
application: the JSON API under ``/api/game``, a health probe under
``/api/health``, a playable HTML page at ``/`` and a Socket.IO namespace that
pushes the game state to connected clients after every transition.
"""

from __future__ import annotations

import argparse
import logging
import os
import random
import threading
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path

from flask import Flask, current_app, g, has_request_context
from flask_socketio import SocketIO, emit

import paths
from config.settings import get_settings
from GameControl import GameStateMachine, JsonSettingsStore
from routes.game import game_bp
from routes.health import health_bp
from routes.pages import pages_bp

logger = logging.getLogger(__name__)

GAME_NAMESPACE = "/ws/game"

socketio = SocketIO()


class RequestIDFilter(logging.Filter):
    def filter(self, record):
        if has_request_context() and hasattr(g, "request_id"):
            record.request_id = g.request_id
        else:
            record.request_id = "-"
        return True


class SafeRotatingFileHandler(RotatingFileHandler):
    """RotatingFileHandler that ensures the log directory exists."""

    def __init__(self, filename, *args, **kwargs):  # type: ignore[override]
        Path(filename).parent.mkdir(parents=True, exist_ok=True)
        super().__init__(filename, *args, **kwargs)


def setup_logging(level: int = logging.INFO) -> logging.Handler:
    """Configure application and access logging.

    Returns the main application log handler so tests can inspect it.  The
    handler writes UTF-8 to ``app.log`` in :data:`paths.LOGS_DIR` and is only
    installed once per file, so repeated calls (for example from the Flask
    reloader) reuse it.  When the environment variable ``ROPASCI_ACCESS_LOG``
    is set, werkzeug's access log is additionally written to ``access.log``.
    """

    log_dir = Path(paths.LOGS_DIR)
    log_path = log_dir / "app.log"

    root = logging.getLogger()
    root.setLevel(level)

    existing = next(
        (
            h
            for h in root.handlers
            if isinstance(h, SafeRotatingFileHandler) and Path(getattr(h, "baseFilename", "")) == log_path
        ),
        None,
    )
    if existing is None:
        handler = SafeRotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        formatter = logging.Formatter("%(asctime)s %(levelname)s [%(request_id)s] %(message)s")
        handler.setFormatter(formatter)
        handler.addFilter(RequestIDFilter())
        root.addHandler(handler)
        main_handler = handler
    else:
        main_handler = existing

    werk_logger = logging.getLogger("werkzeug")
    if os.getenv("ROPASCI_ACCESS_LOG"):
        werk_logger.setLevel(logging.INFO)
        access_file = log_dir / "access.log"
        access_existing = next(
            (
                h
                for h in werk_logger.handlers
                if isinstance(h, SafeRotatingFileHandler) and Path(getattr(h, "baseFilename", "")) == access_file
            ),
            None,
        )
        if access_existing is None:
            werk_logger.addHandler(
                SafeRotatingFileHandler(access_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
            )
    else:
        werk_logger.setLevel(logging.WARNING)

    return main_handler


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def broadcast_game_update(game: GameStateMachine) -> None:
    """Push the state of ``game`` to every client on :data:`GAME_NAMESPACE`."""

    socketio.emit("game_update", game.to_dict(), namespace=GAME_NAMESPACE)


@socketio.on("connect", namespace=GAME_NAMESPACE)
def on_connect():
    with current_app.config["game_lock"]:
        state = current_app.config["game"].to_dict()
    emit("game_update", state)


def create_app(store=None, rng=None) -> Flask:
    """Build the Flask application around a fresh game.

    ``store`` defaults to a :class:`JsonSettingsStore` at ``SETTINGS_FILE``
    (or :data:`paths.SETTINGS_JSON` when unset) and ``rng`` to a
    :class:`random.Random` seeded with ``RANDOM_SEED``.
    """

    cfg = get_settings()
    paths.refresh_paths()
    setup_logging(_log_level(cfg.LOG_LEVEL))

    if store is None:
        store = JsonSettingsStore(cfg.SETTINGS_FILE or paths.SETTINGS_JSON)
    if rng is None:
        rng = random.Random(cfg.RANDOM_SEED)
    game = GameStateMachine(store=store, rng=rng, high_score_key=cfg.HIGH_SCORE_KEY)

    app = Flask(__name__)
    app.secret_key = cfg.ROPASCI_SECRET_KEY
    app.config.update(game=game, game_lock=threading.Lock())

    app.register_blueprint(pages_bp)
    app.register_blueprint(game_bp)
    app.register_blueprint(health_bp, url_prefix="/api/health")

    @app.before_request
    def add_request_id():
        g.request_id = uuid.uuid4().hex

    socketio.init_app(app, cors_allowed_origins="*")
    game.subscribe(broadcast_game_update)

    logger.info("Settings file = %s", getattr(store, "path", "<memory>"))
    return app


def main(argv=None) -> None:
    cfg = get_settings()
    parser = argparse.ArgumentParser(description="Run the Rock Paper Scissors server")
    parser.add_argument("--host", default=cfg.ROPASCI_HOST)
    parser.add_argument("--port", type=int, default=cfg.ROPASCI_PORT)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    app = create_app()
    socketio.run(app, host=args.host, port=args.port, debug=args.debug, allow_unsafe_werkzeug=True)


if __name__ == "__main__":
    main()
