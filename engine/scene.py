from __future__ import annotations
from typing import Protocol
import pygame


class Scene(Protocol):
    """
    What GameApp drives once per frame, in this order:
      handle_event() for each pending event (True = consumed),
      update(dt) to sample input, draw(surface) to lay out, render and resolve it.
    on_enter()/on_exit() bracket the run loop.
    """
    def on_enter(self) -> None: ...
    def on_exit(self) -> None: ...

    def handle_event(self, e: pygame.event.Event) -> bool: ...
    def update(self, dt: float) -> None: ...
    def draw(self, surface: pygame.Surface) -> None: ...
