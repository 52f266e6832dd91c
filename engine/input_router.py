from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from engine.hit_regions import Action, HitRegionRegistry

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 200


@dataclass(frozen=True)
class PointerSample:
    """ Pointer state for one frame: cursor position, left button, clock (ms). """
    pos: Tuple[int, int]
    pressed: bool
    time_ms: int


@dataclass
class PointerDebounceState:
    was_pressed: bool = False
    last_accepted_ms: Optional[int] = None   # None until the first accepted click


@dataclass(frozen=True)
class Dispatch:
    action: Optional[Action] = None
    hover: bool = False


class InputDispatcher:
    """
    Central gatekeeper for 'did the player click something this frame?'

    Rules:
      - A click happens on release (pressed -> not pressed), never on press or hold.
      - A click is dropped if it comes sooner than `debounce_ms` after the last
        accepted one. Dropped clicks are not retried.
      - An accepted click resolves to the first region under the pointer, if any.
      - Hover is reported every frame for cursor feedback; it is never debounced.
    """

    def __init__(self, debounce_ms: int = DEFAULT_DEBOUNCE_MS) -> None:
        self.debounce_ms = int(debounce_ms)
        self.state = PointerDebounceState()

    # --- public API ---------------------------------------------------------
    def process(self, sample: PointerSample, regions: HitRegionRegistry) -> Dispatch:
        action: Optional[Action] = None
        if self._released(sample.pressed) and self._accept(sample.time_ms):
            region = regions.region_at(sample.pos)
            if region is not None:
                action = region.action
                logger.debug("click at %s -> %r", sample.pos, action)
            else:
                logger.debug("click at %s hit nothing", sample.pos)
        return Dispatch(action=action, hover=regions.contains(sample.pos))

    # --- helpers ------------------------------------------------------------
    def _released(self, pressed: bool) -> bool:
        released = self.state.was_pressed and not pressed
        self.state.was_pressed = bool(pressed)
        return released

    def _accept(self, now_ms: int) -> bool:
        last = self.state.last_accepted_ms
        if last is not None and now_ms - last < self.debounce_ms:
            logger.debug("click dropped: %d ms after the last one", now_ms - last)
            return False
        self.state.last_accepted_ms = now_ms
        return True
