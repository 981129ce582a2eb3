from __future__ import annotations

"""Small file helpers with explicit UTF-8 handling."""

import json
import os
import tempfile
from pathlib import Path
from typing import IO, Any


def open_utf8(path: str | Path, mode: str = "r", newline: str | None = "", **kwargs) -> IO[str]:
    """Return an open text file handle using UTF-8 encoding.

    Parameters
    ----------
    path:
        File system path to open.
    mode:
        File mode passed to :func:`open` (defaults to ``"r"``).
    newline:
        Optional newline sequence forwarded to :func:`open`.  Defaults to
        ``""`` which enables universal newline handling.  Use ``None`` to
        retain platform-specific behavior.
    **kwargs:
        Additional keyword options forwarded directly to :func:`open`.

    Returns
    -------
    IO[str]:
        An open text file handle.
    """
    return open(Path(path), mode, newline=newline, encoding="utf-8", **kwargs)


def read_json(path: str | Path) -> Any:
    """Return the decoded JSON document at ``path``.

    :class:`FileNotFoundError` and :class:`json.JSONDecodeError` propagate so
    callers can decide which default applies.
    """
    with open_utf8(path, "r") as fh:
        return json.load(fh)


def write_json_atomic(path: str | Path, data: Any) -> None:
    """Write ``data`` as JSON to ``path`` by replacing the file atomically.

    The document is written to a temporary file in the same directory and
    moved into place with :func:`os.replace`, so readers never observe a
    partially written file.  Parent directories are created on demand.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.remove(tmp_name)
        except FileNotFoundError:
            pass
        raise


__all__ = ["open_utf8", "read_json", "write_json_atomic"]
