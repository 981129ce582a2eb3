"""Game state enumeration and helpers.

This module centralises the two screens the game moves between and maps them
to the view names expected by the page template.
"""

from __future__ import annotations

from enum import Enum


class GameState(str, Enum):
    """Enumeration of game states."""

    SELECTING = "SELECTING"
    RESULT = "RESULT"


# Mapping from internal :class:`GameState` values to view names.
VIEW_MAP: dict[GameState, str] = {
    GameState.SELECTING: "selection",
    GameState.RESULT: "result",
}


def to_view(state: str) -> str:
    """Translate internal ``state`` name to the view that renders it.

    Parameters
    ----------
    state:
        Name of the internal game state.  Comparison is case-insensitive.

    Returns
    -------
    str
        Corresponding view name.  Unknown states are lowercased and returned
        unchanged.
    """

    try:
        enum_state = GameState[state.upper()]
    except KeyError:
        return state.lower()
    return VIEW_MAP[enum_state]


__all__ = ["GameState", "VIEW_MAP", "to_view"]
