from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict


def _get_base_dir() -> Path:
    """Return the repository root honoring PyInstaller's runtime hooks."""

    if bool(getattr(sys, "frozen", False)) and hasattr(sys, "_MEIPASS"):
        return Path(sys._MEIPASS)  # pragma: no cover - frozen builds only
    p = os.environ.get("BASE_DIR")
    return Path(p) if p else Path(__file__).resolve().parent


def _compute() -> Dict[str, Path]:
    BASE = _get_base_dir()
    STATE = BASE / "state"

    # Directories are only computed here.  Callers that write into them
    # create them on demand.
    return {
        "BASE_DIR": BASE,
        "STATE_DIR": STATE,
        "LOGS_DIR": BASE / "logs",
        "SETTINGS_JSON": STATE / "settings.json",
    }


def _apply(d):
    globals().update(d)


def refresh_paths() -> None:
    """Recompute globals after BASE_DIR changes (tests call this)."""
    _apply(_compute())


# initialize on import
_apply(_compute())
