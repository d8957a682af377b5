"""Input normalization helpers."""

from __future__ import annotations

from typing import Any, Optional


def is_blank(value: Any) -> bool:
    """True for ``None`` and for strings that are empty once trimmed."""

    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def strip_text(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def blank_to_none(value: Any) -> Optional[Any]:
    """Normalize blank optional input to ``None`` so absence stays explicit."""

    if is_blank(value):
        return None
    return strip_text(value)
