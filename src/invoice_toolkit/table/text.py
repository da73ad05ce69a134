"""
Module: table.text

Purpose:
    Backend-neutral text helpers shared by drawing surfaces.

Key Functions:
    - cell_text(): Stringify a cell value
    - wrap_text(): Greedy word wrap against a width-measuring callable
"""

from __future__ import annotations

from typing import Callable, List


def cell_text(value: object) -> str:
    """Render a cell value as text (None becomes an empty cell)."""
    if value is None:
        return ""
    return str(value)


def wrap_text(text: str, width: float, measure: Callable[[str], float]) -> List[str]:
    """
    Wrap text into lines no wider than `width`.

    Explicit newlines start a new line. A single word wider than `width`
    is kept whole on its own line.

    Args:
        text: Text to wrap
        width: Maximum line width in layout units
        measure: Returns the rendered width of a string

    Returns:
        Wrapped lines (empty list for empty text)

    Example:
        >>> wrap_text("aa bb cc", 5, len)
        ['aa bb', 'cc']
    """
    if not text:
        return []

    lines: List[str] = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        line = words[0]
        for word in words[1:]:
            candidate = f"{line} {word}"
            if measure(candidate) <= width:
                line = candidate
            else:
                lines.append(line)
                line = word
        lines.append(line)
    return lines
