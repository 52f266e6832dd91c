from __future__ import annotations

import logging
import pygame

from engine.settings import AppCfg
from engine.resources import load_image
from engine.narrative.loader import default_story_path, load_story_file

from game.scenes.story import StoryScene

logger = logging.getLogger(__name__)


class GameApp:
    """
    Minimal app shell: window, frame clock, and the one story scene.
    Per-frame work (layout, click regions, drawing, input) lives in the scene.
    """

    def __init__(self, cfg: AppCfg):
        self.cfg = cfg
        pygame.init()
        pygame.display.set_caption(cfg.window.title)

        # Window/display
        self._flags = pygame.DOUBLEBUF | (pygame.RESIZABLE if cfg.window.resizable else 0)
        self.screen = pygame.display.set_mode(
            (int(cfg.window.width), int(cfg.window.height)),
            flags=self._flags,
        )

        # Core loop
        self.clock = pygame.time.Clock()
        self.running = True

        # Story is loaded after set_mode so images convert to the display format
        graph, _ = load_story_file(default_story_path(cfg.story.path), image_loader=load_image)

        self.scene = StoryScene(graph, cfg)

    # ------------------------------------------------------------------ #
    # Main loop
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        self.scene.on_enter()
        try:
            while self.running:
                dt = self.clock.tick(self.cfg.fps) / 1000.0

                # ---- event pump -------------------------------------------------
                for e in pygame.event.get():
                    # Window closed
                    if e.type == pygame.QUIT:
                        self.running = False
                        break

                    # Resize: update display first, then forward event
                    if e.type == pygame.VIDEORESIZE:
                        self._resize_to(e.w, e.h)

                    self.scene.handle_event(e)

                # ---- update/draw -----------------------------------------------
                self.scene.update(dt)
                self.scene.draw(self.screen)
                pygame.display.flip()
        finally:
            self.scene.on_exit()
            pygame.quit()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _resize_to(self, w: int, h: int) -> None:
        """Recreate the window surface; the scene draws to it from the next frame."""
        w = max(1, int(w))
        h = max(1, int(h))
        self.screen = pygame.display.set_mode((w, h), flags=self._flags)
        logger.debug("window resized to %dx%d", w, h)
