from __future__ import annotations
from dataclasses import dataclass
from collections import OrderedDict
from typing import Dict, Optional, Protocol, Tuple
import pygame

@dataclass(frozen=True)
class FontKey:
    path: Optional[str]
    size: int


class GlyphMetrics(Protocol):
    """ What layout needs to know about a font. Widths/heights are pixels. """
    ascent: int
    height: int

    def advance_width(self, ch: str) -> int: ...
    def text_width(self, text: str) -> int: ...
    def bounding_box(self, text: str) -> Tuple[int, int]: ...


class FontMetrics:
    """
    GlyphMetrics over a pygame Font.
      - text_width(): sum of per-glyph advances (used for wrapping)
      - bounding_box(): rendered (w, h) of the whole string (used for centring/hit boxes)
    Advances are memoised per character; fonts are immutable once built.
    """

    def __init__(self, font: pygame.font.Font) -> None:
        self.font = font
        self.ascent = font.get_ascent()
        self.height = font.get_height()
        self._advances: Dict[str, int] = {}

    def advance_width(self, ch: str) -> int:
        adv = self._advances.get(ch)
        if adv is None:
            m = self.font.metrics(ch)
            # metrics() yields None for glyphs the font lacks
            adv = m[0][4] if m and m[0] else self.font.size(ch)[0]
            self._advances[ch] = adv
        return adv

    def text_width(self, text: str) -> int:
        return sum(self.advance_width(ch) for ch in text or "")

    def bounding_box(self, text: str) -> Tuple[int, int]:
        return self.font.size(text or "")


class FontCache:
    """
    Tiny LRU cache for pygame.font.Font objects keyed by FontKey.
      m    = fonts.metrics(path, size)
      surf = fonts.render(key, "Hello", (255,255,255))
    """

    def __init__(self, max_entries: int = 16) -> None:
        self._cache: "OrderedDict[FontKey, pygame.font.Font]" = OrderedDict()
        self._metrics: Dict[FontKey, FontMetrics] = {}
        self._max = max(1, int(max_entries))

    # ---------- Public: acquire fonts ----------
    def key(self, path: Optional[str], size: int) -> FontKey:
        return FontKey(path, int(size))

    def metrics(self, path: Optional[str], size: int) -> FontMetrics:
        k = self.key(path, size)
        m = self._metrics.get(k)
        if m is None:
            m = FontMetrics(self._get_by_key(k))
            self._metrics[k] = m
        return m

    def render(self, k: FontKey, text: str, color: Tuple[int, int, int], aa: bool = True) -> pygame.Surface:
        return self._get_by_key(k).render(text or "", aa, color)

    # ---------- Cache management ----------
    def clear(self) -> None:
        self._cache.clear()
        self._metrics.clear()

    # ---------- Internals ----------
    def _get_by_key(self, k: FontKey) -> pygame.font.Font:
        f = self._cache.get(k)
        if f is not None:
            # touch for LRU
            self._cache.move_to_end(k)
            return f

        if not pygame.font.get_init():
            pygame.font.init()
        f = pygame.font.Font(k.path, k.size)

        self._cache[k] = f
        while len(self._cache) > self._max:
            old, _ = self._cache.popitem(last=False)
            self._metrics.pop(old, None)
        return f
