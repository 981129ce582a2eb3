import sys
from pathlib import Path  # noqa: E402

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import logging  # noqa: E402
import os  # noqa: E402

import pytest  # noqa: E402

os.environ.setdefault("BASE_DIR", str(ROOT))
os.environ.setdefault("ROPASCI_SECRET_KEY", "test-secret")

from config.settings import reset_settings  # noqa: E402
from GameControl import Choice, GameStateMachine, MemorySettingsStore  # noqa: E402


class FixedChoice:
    """Random source stub returning queued choices in order.

    The last queued choice repeats once the queue is exhausted.
    """

    def __init__(self, *choices: Choice):
        self.queue = list(choices) or [Choice.ROCK]
        self.calls = 0

    def choice(self, seq):
        self.calls += 1
        assert set(seq) == set(Choice)
        if len(self.queue) > 1:
            return self.queue.pop(0)
        return self.queue[0]


@pytest.fixture
def fixed_choice():
    return FixedChoice


@pytest.fixture
def make_game():
    """Return a factory building a game with an in-memory store."""

    def _make(*opponent, high_score=0):
        store = MemorySettingsStore({"highScore": high_score})
        return GameStateMachine(store=store, rng=FixedChoice(*opponent))

    return _make


@pytest.fixture
def tmp_base_dir(tmp_path, monkeypatch):
    """Point BASE_DIR at ``tmp_path`` and reload settings and paths."""

    monkeypatch.setenv("BASE_DIR", str(tmp_path))
    monkeypatch.delenv("SETTINGS_FILE", raising=False)
    reset_settings()
    import paths

    paths.refresh_paths()
    yield tmp_path
    monkeypatch.undo()
    reset_settings()
    paths.refresh_paths()


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Reset settings between tests to avoid env leakage."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def _detach_file_handlers():
    """Remove log file handlers added by ``setup_logging`` during a test."""
    root = logging.getLogger()
    before = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)
            handler.close()
