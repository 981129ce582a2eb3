"""JSON endpoints driving the game state machine.

The machine and its lock live in ``current_app.config`` under ``game`` and
``game_lock``; :func:`ropasci_server.create_app` puts them there.
"""

from __future__ import annotations

import logging
from typing import Callable

from flask import Blueprint, current_app, jsonify, request

from GameControl import Choice, GameStateMachine, InvalidChoice

logger = logging.getLogger(__name__)

game_bp = Blueprint("game", __name__)


def _game() -> GameStateMachine:
    return current_app.config["game"]


def _transition(apply: Callable[[GameStateMachine], bool]):
    game = _game()
    with current_app.config["game_lock"]:
        try:
            applied = apply(game)
        except OSError as exc:
            logger.error("Failed to persist game settings: %s", exc, exc_info=True)
            return jsonify(ok=False, error=str(exc), state=game.to_dict()), 500
        state = game.to_dict()
    if not applied:
        return (
            jsonify(ok=False, error=f"not allowed in {state['state']}", state=state),
            409,
        )
    return jsonify(ok=True, state=state)


@game_bp.route("/api/game/state", methods=["GET"])
def get_state():
    """Return the current game state."""
    with current_app.config["game_lock"]:
        return jsonify(ok=True, state=_game().to_dict())


@game_bp.route("/api/game/choices", methods=["GET"])
def get_choices():
    """List the choices in button order."""
    return jsonify(
        ok=True,
        choices=[{"choice": c.value, "progress_time": c.progress_time} for c in Choice],
    )


@game_bp.route("/api/game/choose", methods=["POST"])
def choose():
    payload = request.get_json(silent=True) or {}
    try:
        choice = Choice.parse(payload.get("choice"))
    except InvalidChoice as exc:
        return jsonify(ok=False, error=str(exc)), 400
    return _transition(lambda game: game.choose(choice))


@game_bp.route("/api/game/next", methods=["POST"])
def next_round():
    return _transition(lambda game: game.next_round())


@game_bp.route("/api/game/reset", methods=["POST"])
def reset_match():
    return _transition(lambda game: game.reset_match())


__all__ = ["game_bp"]
