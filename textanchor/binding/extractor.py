"""
Anchor extraction — builds a context-bearing Anchor from a selected span.
"""

from typing import Optional

from ..schema import Anchor

DEFAULT_CONTEXT_LENGTH = 80


def extract_anchor(
    full_text: str,
    start: int,
    end: int,
    context_length: int = DEFAULT_CONTEXT_LENGTH,
) -> Optional[Anchor]:
    """
    Extract an anchor for full_text[start:end].

    Args:
        full_text: Flattened text content of the whole document
        start, end: Half-open selection offsets
        context_length: Max characters of prefix/suffix context

    Returns:
        Anchor, or None when the selection is collapsed or only whitespace.
    """
    if not 0 <= start <= end <= len(full_text):
        raise ValueError(f"Selection {start}-{end} outside text of length {len(full_text)}")
    if context_length < 0:
        raise ValueError(f"context_length must be >= 0, got {context_length}")

    selected = full_text[start:end]
    if not selected.strip():
        return None

    return Anchor(
        text=selected,
        prefix=full_text[max(0, start - context_length) : start],
        suffix=full_text[end : end + context_length],
    )


def anchor_from_selection(
    full_text: str,
    selected_text: str,
    occurrence: int = 0,
    context_length: int = DEFAULT_CONTEXT_LENGTH,
) -> Optional[Anchor]:
    """
    Extract an anchor for the n-th occurrence of selected_text.

    Returns None when the selection is blank or that occurrence does not exist.
    """
    if not selected_text.strip():
        return None

    pos = -1
    for _ in range(occurrence + 1):
        pos = full_text.find(selected_text, pos + 1)
        if pos < 0:
            return None
    return extract_anchor(full_text, pos, pos + len(selected_text), context_length)
