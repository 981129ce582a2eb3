"""Rock-paper-scissors game state machine.

The machine moves between two states.  In ``SELECTING`` the player picks a
gesture with :meth:`GameStateMachine.choose`; the opponent's gesture is drawn
from the injected random source and the round outcome is scored at once.  In
``RESULT`` the player either continues the match with
:meth:`GameStateMachine.next_round` or ends it with
:meth:`GameStateMachine.reset_match`, which stores a new high score when the
match beat it.

Transitions called from the wrong state are ignored and return ``False``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from .common.choices import Choice, Outcome, outcome
from .common.states import GameState, to_view
from .high_score import HIGH_SCORE_KEY, MemorySettingsStore, SettingsStore

logger = logging.getLogger(__name__)

Listener = Callable[["GameStateMachine"], None]


class RandomSource(Protocol):
    def choice(self, seq: Sequence[Choice]) -> Choice: ...


@dataclass
class Session:
    """Mutable record of the current match."""

    player_score: int = 0
    opponent_score: int = 0
    high_score: int = 0
    player_choice: Optional[Choice] = None
    opponent_choice: Optional[Choice] = None
    result_visible: bool = False
    round: int = 1


class GameStateMachine:
    """Own the :class:`Session` and apply user triggered transitions."""

    def __init__(
        self,
        store: SettingsStore | None = None,
        rng: RandomSource | None = None,
        high_score_key: str = HIGH_SCORE_KEY,
    ):
        self.store = store if store is not None else MemorySettingsStore()
        self.rng = rng if rng is not None else random.Random()
        self.high_score_key = high_score_key
        self._listeners: List[Listener] = []
        self._session = Session(high_score=self.store.get_int(high_score_key, 0))
        logger.info("Game started with high score %d", self._session.high_score)

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return GameState.RESULT if self._session.result_visible else GameState.SELECTING

    @property
    def player_score(self) -> int:
        return self._session.player_score

    @property
    def opponent_score(self) -> int:
        return self._session.opponent_score

    @property
    def high_score(self) -> int:
        return self._session.high_score

    @property
    def player_choice(self) -> Optional[Choice]:
        return self._session.player_choice

    @property
    def opponent_choice(self) -> Optional[Choice]:
        return self._session.opponent_choice

    @property
    def result_visible(self) -> bool:
        return self._session.result_visible

    @property
    def round(self) -> int:
        return self._session.round

    @property
    def outcome(self) -> Optional[Outcome]:
        """Outcome of the current round, ``None`` while selecting."""
        s = self._session
        if s.player_choice is None or s.opponent_choice is None:
            return None
        return outcome(s.player_choice, s.opponent_choice)

    def to_dict(self) -> Dict[str, object]:
        result = self.outcome
        return {
            "state": self.state.value,
            "view": to_view(self.state.value),
            "round": self.round,
            "player_score": self.player_score,
            "opponent_score": self.opponent_score,
            "high_score": self.high_score,
            "player_choice": self.player_choice.value if self.player_choice else None,
            "opponent_choice": self.opponent_choice.value if self.opponent_choice else None,
            "outcome": result.value if result else None,
            "message": result.message if result else None,
            "result_visible": self.result_visible,
        }

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every applied transition.

        Returns a function that removes the listener again.
        """

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Game state listener %r failed", listener)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def choose(self, choice: Choice) -> bool:
        """Commit the player's ``choice`` and score the round.

        ``choice`` may also be a tag such as ``"rock"``; unknown tags raise
        :class:`~GameControl.exceptions.InvalidChoice`.
        """

        choice = Choice.parse(choice)
        if self.state is not GameState.SELECTING:
            logger.debug("Ignoring choose(%s) in %s", choice.value, self.state.value)
            return False

        s = self._session
        s.player_choice = choice
        s.opponent_choice = self.rng.choice(list(Choice))
        s.result_visible = True

        result = outcome(s.player_choice, s.opponent_choice)
        if result is Outcome.WIN:
            s.player_score += 1
        elif result is Outcome.LOSE:
            s.opponent_score += 1

        logger.info(
            "Round %d: %s vs %s -> %s (%d:%d)",
            s.round,
            s.player_choice.value,
            s.opponent_choice.value,
            result.value,
            s.player_score,
            s.opponent_score,
        )
        self._notify()
        return True

    def next_round(self) -> bool:
        """Clear both choices and return to selection, keeping the scores."""

        if self.state is not GameState.RESULT:
            logger.debug("Ignoring next_round() in %s", self.state.value)
            return False
        self._clear_round()
        self._session.round += 1
        self._notify()
        return True

    def reset_match(self) -> bool:
        """End the match, storing a new high score when it was beaten."""

        if self.state is not GameState.RESULT:
            logger.debug("Ignoring reset_match() in %s", self.state.value)
            return False

        s = self._session
        if s.player_score > s.high_score:
            # Persist first so a failed write leaves the session untouched.
            self.store.set_int(self.high_score_key, s.player_score)
            logger.info("New high score %d (was %d)", s.player_score, s.high_score)
            s.high_score = s.player_score

        s.player_score = 0
        s.opponent_score = 0
        s.round = 1
        self._clear_round()
        logger.info("Match reset")
        self._notify()
        return True

    def _clear_round(self) -> None:
        s = self._session
        s.player_choice = None
        s.opponent_choice = None
        s.result_visible = False


__all__ = ["GameStateMachine", "Session", "RandomSource", "Listener"]
