from __future__ import annotations
from typing import Callable, List

from engine.ui.fonts import GlyphMetrics

Measure = Callable[[str], int]


def wrap(text: str, measure: Measure, max_width: int) -> List[str]:
    """
    Greedy word wrap against a pixel width.

    Words are whitespace-separated (newlines and runs of spaces collapse).
    A word that doesn't fit on the current line starts a new one; a single
    word wider than `max_width` is left whole on its own line and overflows.
    """
    words = (text or "").split()
    if not words:
        return []

    lines: List[str] = []
    cur = words[0]
    for word in words[1:]:
        cand = f"{cur} {word}"
        if measure(cand) > max_width:
            lines.append(cur)
            cur = word
        else:
            cur = cand
    lines.append(cur)
    return lines


class TextLayout:
    """
    Wrap helper bound to one font's metrics.
    Line width is the sum of glyph advances.
    """

    def __init__(self, metrics: GlyphMetrics):
        self.metrics = metrics

    def wrap_lines(self, text: str, wrap_w: int) -> List[str]:
        return wrap(text, self.metrics.text_width, wrap_w)
