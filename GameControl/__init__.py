"""GameControl package.

The game core: choice and outcome rules, the game state machine and the
stores that persist the high score.  Nothing here depends on Flask, so the
presentation layer can be swapped without touching the rules.
"""

from .common.choices import Choice, Outcome, outcome
from .common.states import GameState
from .exceptions import InvalidChoice, RoPaSciError
from .game_manager import GameStateMachine, Session
from .high_score import HIGH_SCORE_KEY, JsonSettingsStore, MemorySettingsStore

__all__ = [
    "Choice",
    "Outcome",
    "outcome",
    "GameState",
    "GameStateMachine",
    "Session",
    "InvalidChoice",
    "RoPaSciError",
    "HIGH_SCORE_KEY",
    "JsonSettingsStore",
    "MemorySettingsStore",
]
