"""Exceptions raised at the edges of the game core.

The state machine itself never raises: out-of-state transitions are ignored.
These exceptions cover input arriving from the presentation layer.
"""


class RoPaSciError(Exception):
    """Base class for all game errors."""


class InvalidChoice(RoPaSciError, ValueError):
    """A choice tag that does not name rock, paper or scissors."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown choice {value!r}; expected rock, paper or scissors")


__all__ = ["RoPaSciError", "InvalidChoice"]
