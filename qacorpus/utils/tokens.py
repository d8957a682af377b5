"""Token estimation helpers."""

from __future__ import annotations

from typing import Any

CHARS_PER_TOKEN = 4


def estimate_tokens(text: Any) -> int:
    """Approximate the token count of ``text`` as ``ceil(len(text) / 4)``.

    This is a character heuristic rather than a tokenizer. Anything that is not
    a string counts as zero tokens.
    """

    if not isinstance(text, str):
        return 0
    return -(-len(text) // CHARS_PER_TOKEN)
