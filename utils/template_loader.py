from __future__ import annotations

from pathlib import Path
from typing import List


def template_candidates(name: str) -> List[Path]:
    """Return the locations searched for template ``name`` in priority order.

    A ``templates`` directory under the configured base directory overrides
    the page shipped in ``utils/resources/templates``.
    """
    import paths

    return [
        Path(paths.BASE_DIR) / "templates" / name,
        Path(__file__).with_name("resources") / "templates" / name,
    ]


def load_template(name: str) -> str:
    """Return contents of template ``name``.

    The first existing candidate from :func:`template_candidates` is returned
    as text.  A :class:`FileNotFoundError` is raised if the template cannot be
    located.
    """
    candidates = template_candidates(name)
    for path in candidates:
        if path.exists():
            return path.read_text(encoding="utf-8")
    raise FileNotFoundError(f"Template '{name}' not found in any of: {', '.join(str(p) for p in candidates)}")
