"""Key/value settings stores used to persist the high score.

The game only needs two operations, reading and writing an integer under a
named key, so stores implement that narrow interface and nothing more.
:class:`JsonSettingsStore` keeps the values in a small JSON object on disk;
:class:`MemorySettingsStore` keeps them in a dict for tests and throwaway
sessions.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Protocol

from utils.files import read_json, write_json_atomic

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "highScore"


class SettingsStore(Protocol):
    def get_int(self, key: str, default: int = 0) -> int: ...

    def set_int(self, key: str, value: int) -> None: ...


class MemorySettingsStore:
    """Dict backed store.  Values live only as long as the instance."""

    def __init__(self, initial: Dict[str, int] | None = None):
        self.values: Dict[str, int] = dict(initial or {})

    def get_int(self, key: str, default: int = 0) -> int:
        return int(self.values.get(key, default))

    def set_int(self, key: str, value: int) -> None:
        self.values[key] = int(value)


class JsonSettingsStore:
    """Store integers in a JSON object at ``path``.

    Reads are forgiving: a missing file, malformed JSON, a document that is
    not an object or a value that is not a non-negative integer all yield
    ``default``, with a warning logged for anything malformed.
    Writes rewrite the whole document atomically and preserve unrelated keys.
    :class:`OSError` from a failed write propagates to the caller.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, object]:
        try:
            data = read_json(self.path)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Ignoring malformed settings file %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file %s does not hold an object", self.path)
            return {}
        return data

    def get_int(self, key: str, default: int = 0) -> int:
        data = self._load()
        if key not in data:
            return default
        value = data[key]
        # bool is an int subclass but never a valid score
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            logger.warning("Ignoring invalid %s=%r in settings file %s", key, value, self.path)
            return default
        return value

    def set_int(self, key: str, value: int) -> None:
        data = self._load()
        data[key] = int(value)
        write_json_atomic(self.path, data)
        logger.debug("Stored %s=%s in %s", key, value, self.path)


__all__ = ["SettingsStore", "MemorySettingsStore", "JsonSettingsStore", "HIGH_SCORE_KEY"]
