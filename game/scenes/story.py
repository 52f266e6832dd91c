# game/scenes/story.py
from __future__ import annotations
import logging
import sys
from typing import Optional, Tuple
import pygame

from engine.scene import Scene
from engine.settings import AppCfg
from engine.hit_regions import Action, HitRegionRegistry, Quit
from engine.input_router import InputDispatcher, PointerSample
from engine.narrative.graph import StoryGraph
from engine.narrative.session import StorySession
from engine.ui.fonts import FontCache, GlyphMetrics
from engine.ui.story_layout import FrameLayout, ImagePlacement, StoryLayout, TextRun

logger = logging.getLogger(__name__)


class StoryScene(Scene):
    """
    Story play scene.
    - Owns the play session (current/start node, shown illustration)
    - Each frame: lay out the current node, rebuild the click regions,
      draw, then resolve this frame's pointer against those same regions
    - Clicking [Quit] exits the program on the spot
    """

    def __init__(
        self,
        graph: StoryGraph,
        cfg: AppCfg,
        *,
        fonts: Optional[FontCache] = None,
        metrics: Optional[GlyphMetrics] = None,
    ):
        self.cfg = cfg
        self.theme = cfg.theme
        self.fonts = fonts or FontCache()
        self._font_key = self.fonts.key(self.theme.font_path, self.theme.font_size)
        if metrics is None:
            metrics = self.fonts.metrics(self.theme.font_path, self.theme.font_size)

        self.session = StorySession(graph)
        self.regions = HitRegionRegistry()
        self.dispatcher = InputDispatcher(cfg.input.debounce_ms)
        self.layout = StoryLayout(metrics, cfg.layout)

        self.viewport: Tuple[int, int] = (cfg.window.width, cfg.window.height)
        self.frame: Optional[FrameLayout] = None
        self.hovering = False
        self._cursor_hand: Optional[bool] = None
        self._pointer = PointerSample((-1, -1), False, 0)
        self._scaled: Optional[Tuple[Tuple[int, int, int], pygame.Surface]] = None

    # --- Scene lifecycle ----------------------------------------------------
    def on_enter(self) -> None:
        logger.info("story started at node %d (%d nodes)", self.session.start, len(self.session.graph))

    def on_exit(self) -> None:
        self._scaled = None

    # --- loop ---------------------------------------------------------------
    def handle_event(self, e: pygame.event.Event) -> bool:
        if e.type == pygame.VIDEORESIZE:
            # Picked up by the next layout pass
            self.viewport = (max(1, int(e.w)), max(1, int(e.h)))
        return False

    def update(self, dt: float) -> None:
        # Sample the pointer; it is resolved in draw() once this frame's regions exist
        self._pointer = PointerSample(
            pos=pygame.mouse.get_pos(),
            pressed=bool(pygame.mouse.get_pressed()[0]),
            time_ms=pygame.time.get_ticks(),
        )

    def draw(self, surface: pygame.Surface) -> None:
        frame = self.layout_frame(surface.get_size())
        self._render(surface, frame)
        self.resolve_input(self._pointer)
        self._apply_cursor()

    # --- frame steps (no display needed) ------------------------------------
    def layout_frame(self, viewport: Optional[Tuple[int, int]] = None) -> FrameLayout:
        if viewport is not None:
            self.viewport = (int(viewport[0]), int(viewport[1]))
        s = self.session
        self.frame = self.layout.compose(s.current_node, s.displayed_image, self.viewport, self.regions)
        return self.frame

    def resolve_input(self, sample: PointerSample) -> Optional[Action]:
        result = self.dispatcher.process(sample, self.regions)
        self.hovering = result.hover
        action = result.action
        if action is None:
            return None
        if isinstance(action, Quit):
            logger.info("quit clicked; exiting")
            sys.exit(0)
        self.session.apply(action)
        return action

    # --- drawing ------------------------------------------------------------
    def _render(self, surface: pygame.Surface, frame: FrameLayout) -> None:
        surface.fill(self.theme.bg_rgb)
        if frame.image is not None:
            surface.blit(self._scaled_image(frame.image), (frame.image.x, frame.image.y))

        runs = [frame.quit, *frame.lines, *frame.choices, frame.end_marker, frame.restart]
        for run in runs:
            if run is not None:
                self._blit_text(surface, run)

    def _blit_text(self, surface: pygame.Surface, run: TextRun) -> None:
        surf = self.fonts.render(self._font_key, run.text, self.theme.text_rgb)
        surface.blit(surf, (run.x, run.y))

    def _scaled_image(self, place: ImagePlacement) -> pygame.Surface:
        # One-entry cache: the image only changes on navigation or resize
        key = (id(place.image), place.w, place.h)
        if self._scaled is None or self._scaled[0] != key:
            self._scaled = (key, pygame.transform.smoothscale(place.image, (place.w, place.h)))
        return self._scaled[1]

    def _apply_cursor(self) -> None:
        want_hand = self.hovering and self.theme.hover_cursor
        if want_hand == self._cursor_hand or not pygame.display.get_init():
            return
        self._cursor_hand = want_hand
        cursor = pygame.SYSTEM_CURSOR_HAND if want_hand else pygame.SYSTEM_CURSOR_ARROW
        pygame.mouse.set_system_cursor(cursor)
