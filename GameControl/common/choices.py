"""Choice and outcome enumerations.

A :class:`Choice` is one of the three hand gestures.  The win rule is a fixed
cycle: rock beats scissors, paper beats rock and scissors beats paper.
:class:`Outcome` is never stored; it is derived from a pair of choices by
:func:`outcome`.
"""

from __future__ import annotations

from enum import Enum

from ..exceptions import InvalidChoice


class Choice(str, Enum):
    """Enumeration of hand gestures in button order."""

    SCISSORS = "scissors"
    ROCK = "rock"
    PAPER = "paper"

    @classmethod
    def parse(cls, value: object) -> "Choice":
        """Return the choice named by ``value``.

        Comparison is case-insensitive and surrounding whitespace is ignored.
        :class:`InvalidChoice` is raised for anything else.
        """

        if isinstance(value, Choice):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidChoice(value)

    @property
    def beats(self) -> "Choice":
        """The choice this one defeats."""
        return _BEATS[self]

    @property
    def winning_choice(self) -> "Choice":
        """The choice that defeats this one."""
        return _WINNING[self]

    @property
    def progress_time(self) -> float:
        """Frame position of this gesture in the shared hand animation."""
        return PROGRESS_TIME[self]


_BEATS: dict[Choice, Choice] = {
    Choice.ROCK: Choice.SCISSORS,
    Choice.PAPER: Choice.ROCK,
    Choice.SCISSORS: Choice.PAPER,
}

_WINNING: dict[Choice, Choice] = {loser: winner for winner, loser in _BEATS.items()}

# Still frames of the gesture animation for each choice.
PROGRESS_TIME: dict[Choice, float] = {
    Choice.ROCK: 0.2,
    Choice.PAPER: 0.86,
    Choice.SCISSORS: 0.54,
}


class Outcome(str, Enum):
    """Round outcome from the player's point of view."""

    WIN = "WIN"
    LOSE = "LOSE"
    DRAW = "DRAW"

    @property
    def message(self) -> str:
        return OUTCOME_MESSAGES[self]


OUTCOME_MESSAGES: dict[Outcome, str] = {
    Outcome.WIN: "You Win!",
    Outcome.LOSE: "You Lost!",
    Outcome.DRAW: "Draw!",
}


def outcome(player: Choice, opponent: Choice) -> Outcome:
    """Return the outcome of ``player`` against ``opponent``."""

    if player is opponent:
        return Outcome.DRAW
    if player.beats is opponent:
        return Outcome.WIN
    return Outcome.LOSE


__all__ = ["Choice", "Outcome", "outcome", "PROGRESS_TIME", "OUTCOME_MESSAGES"]
