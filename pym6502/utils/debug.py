"""Category-filtered debug logging for the 6502 core.

Set ``M6502_DEBUG`` to a comma separated list of categories (``cpu``,
``opcode``, ``memory``) or to ``all``.
"""

from __future__ import annotations

import os
from typing import Iterable

_ENV_VAR = "M6502_DEBUG"
_CATEGORIES: set[str] | None = None


def _load_categories() -> set[str]:
    global _CATEGORIES
    if _CATEGORIES is not None:
        return _CATEGORIES
    value = os.environ.get(_ENV_VAR, "")
    if not value:
        _CATEGORIES = set()
        return _CATEGORIES
    parts: Iterable[str] = (part.strip().lower() for part in value.split(","))
    _CATEGORIES = {part for part in parts if part}
    return _CATEGORIES


def reload_categories() -> None:
    """Forget the cached categories so the next call re-reads the environment."""

    global _CATEGORIES
    _CATEGORIES = None


def debug_enabled(category: str | None = None) -> bool:
    categories = _load_categories()
    if not categories:
        return False
    if "all" in categories:
        return True
    if category is None:
        return True
    return category.lower() in categories


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    prefix = f"[M6502][{category}]"
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"{prefix} {message}")
