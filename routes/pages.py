"""HTML page for playing in a browser.

Buttons post to small form endpoints which apply the transition and redirect
back to the page.  Transitions that do not apply (a stale form re-posted
after the view changed) are simply ignored.
"""

from __future__ import annotations

from flask import Blueprint, current_app, redirect, render_template_string, url_for

from GameControl import Choice, InvalidChoice
from utils.template_loader import load_template

pages_bp = Blueprint("pages", __name__)

ICONS = {
    Choice.ROCK.value: "✊",
    Choice.PAPER.value: "✋",
    Choice.SCISSORS.value: "✌",
}


@pages_bp.route("/")
def game_page():
    with current_app.config["game_lock"]:
        game = current_app.config["game"].to_dict()
    return render_template_string(load_template("game.html"), game=game, choices=list(Choice), icons=ICONS)


@pages_bp.post("/play/<choice>")
def play_page(choice: str):
    try:
        parsed = Choice.parse(choice)
    except InvalidChoice:
        return redirect(url_for("pages.game_page"))
    with current_app.config["game_lock"]:
        current_app.config["game"].choose(parsed)
    return redirect(url_for("pages.game_page"))


@pages_bp.post("/next")
def next_page():
    with current_app.config["game_lock"]:
        current_app.config["game"].next_round()
    return redirect(url_for("pages.game_page"))


@pages_bp.post("/reset")
def reset_page():
    with current_app.config["game_lock"]:
        current_app.config["game"].reset_match()
    return redirect(url_for("pages.game_page"))


__all__ = ["pages_bp", "ICONS"]
