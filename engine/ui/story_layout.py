from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from engine.hit_regions import HitRegionRegistry, Navigate, Quit, Restart
from engine.narrative.types import NodeState, StoryNode
from engine.settings import LayoutCfg
from engine.ui.fonts import GlyphMetrics
from engine.ui.text_layout import TextLayout


@dataclass(frozen=True)
class TextRun:
    text: str
    x: int          # left edge
    y: int          # top edge (baseline - ascent)
    w: int
    h: int


@dataclass(frozen=True)
class ImagePlacement:
    image: Any
    x: int
    y: int
    w: int
    h: int
    scale: float


@dataclass
class FrameLayout:
    viewport: Tuple[int, int]
    image: Optional[ImagePlacement] = None
    lines: List[TextRun] = field(default_factory=list)
    choices: List[TextRun] = field(default_factory=list)
    quit: Optional[TextRun] = None
    end_marker: Optional[TextRun] = None
    restart: Optional[TextRun] = None


def fit_image(image: Any, viewport_w: int, top: int, band_h: int) -> Optional[ImagePlacement]:
    """
    Scale an image to fit a band `viewport_w` x `band_h` (aspect preserved,
    up or down) and centre it horizontally.
    """
    iw, ih = image.get_size()
    if iw <= 0 or ih <= 0 or viewport_w <= 0 or band_h <= 0:
        return None
    scale = min(viewport_w / iw, band_h / ih)
    w, h = max(1, int(iw * scale)), max(1, int(ih * scale))
    return ImagePlacement(image, (viewport_w - w) // 2, top, w, h, scale)


class StoryLayout:
    """
    Computes where everything goes for one frame and records the clickable
    parts in a HitRegionRegistry.

    Rows are placed on baselines like the text renderer expects:
      - story text from cfg.text_top, one row per wrapped line
      - one blank row, then one row per choice
      - on an ending, the end marker and restart label take those rows instead
    Every run's rect starts at baseline - ascent and is as tall as the rendered
    text (never shorter than the font height), so it covers the glyphs.
    """

    def __init__(self, metrics: GlyphMetrics, cfg: LayoutCfg):
        self.metrics = metrics
        self.cfg = cfg
        self.text = TextLayout(metrics)

    def compose(self, node: StoryNode, image: Any | None, viewport: Tuple[int, int], regions: HitRegionRegistry) -> FrameLayout:
        cfg = self.cfg
        vw, vh = int(viewport[0]), int(viewport[1])
        regions.clear()
        frame = FrameLayout(viewport=(vw, vh))

        if image is not None:
            frame.image = fit_image(image, vw, cfg.image_top, cfg.image_band_h)

        # (1) Quit, fixed to the top-right corner
        frame.quit = self._run(cfg.quit_label, vw - cfg.quit_offset_right, top=cfg.quit_top)
        self._register(regions, frame.quit, Quit())

        # Story text, each line centred on its own
        baseline = cfg.text_top
        for line in self.text.wrap_lines(node.text, max(1, vw - 2 * cfg.text_margin)):
            frame.lines.append(self._centred(line, vw, baseline))
            baseline += cfg.line_advance
        baseline += cfg.line_advance

        # (2) Choices, top to bottom in choice order
        for i, ch in enumerate(node.choices):
            run = self._centred(ch.caption, vw, baseline)
            frame.choices.append(run)
            self._register(regions, run, Navigate(i))
            baseline += cfg.line_advance

        # (3) Ending: marker plus restart
        if node.state is NodeState.TERMINAL:
            frame.end_marker = self._run(cfg.end_label, cfg.end_left, baseline=baseline)
            frame.restart = self._run(cfg.restart_label, cfg.end_left, baseline=baseline + cfg.line_advance)
            self._register(regions, frame.restart, Restart())

        return frame

    # --- helpers ------------------------------------------------------------
    def _run(self, text: str, x: int, *, baseline: Optional[int] = None, top: Optional[int] = None) -> TextRun:
        w, h = self.metrics.bounding_box(text)
        if top is None:
            top = int(baseline) - self.metrics.ascent
        # Rendered text can be taller than the font height (descenders, line gap)
        return TextRun(text, int(x), int(top), int(w), max(int(h), int(self.metrics.height)))

    def _centred(self, text: str, viewport_w: int, baseline: int) -> TextRun:
        w, _ = self.metrics.bounding_box(text)
        return self._run(text, (viewport_w - w) // 2, baseline=baseline)

    @staticmethod
    def _register(regions: HitRegionRegistry, run: TextRun, action) -> None:
        regions.add(run.x, run.y, run.w, run.h, action)
