"""Health check blueprint.

Provides a lightweight ``/api/health`` endpoint for status probes.
"""

from __future__ import annotations

import os
from pathlib import Path

import psutil
from flask import Blueprint, current_app, jsonify

health_bp = Blueprint("health", __name__)


def _writable(path: Path) -> bool:
    """Return ``True`` if ``path`` could be written by this process.

    Missing files are judged by their closest existing parent directory.
    """

    target = Path(path)
    while not target.exists():
        if target.parent == target:
            return False
        target = target.parent
    return os.access(target, os.W_OK)


@health_bp.route("/", strict_slashes=False)
def api_health():
    """Return quick status information about the game server."""

    game = current_app.config["game"]
    with current_app.config["game_lock"]:
        state = game.state.value
    store_path = getattr(game.store, "path", None)
    data = {
        "ok": True,
        "state": state,
        "settings_file": str(store_path) if store_path is not None else None,
        "settings_writable": _writable(store_path) if store_path is not None else True,
        "cpu_percent": psutil.cpu_percent(interval=None),
        "mem_percent": psutil.virtual_memory().percent,
    }
    return jsonify(data)


__all__ = ["health_bp"]
