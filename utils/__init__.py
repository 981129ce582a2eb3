from __future__ import annotations

from .files import open_utf8, read_json, write_json_atomic
from .template_loader import load_template

__all__ = ["open_utf8", "read_json", "write_json_atomic", "load_template"]
