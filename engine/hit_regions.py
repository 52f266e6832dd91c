from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

# No pygame import here: regions are plain integer rects so they can be built
# and queried without a display.


@dataclass(frozen=True)
class Navigate:
    choice_index: int

@dataclass(frozen=True)
class Restart:
    pass

@dataclass(frozen=True)
class Quit:
    pass

Action = Union[Navigate, Restart, Quit]


@dataclass(frozen=True)
class HitRegion:
    x: int
    y: int
    w: int
    h: int
    action: Action

    def contains(self, pos: Tuple[int, int]) -> bool:
        # Inclusive on every edge
        px, py = pos
        return self.x <= px <= self.x + self.w and self.y <= py <= self.y + self.h


class HitRegionRegistry:
    """
    Clickable rectangles for the frame currently on screen.

    The frame layout clears and refills this every frame (quit label first,
    then choices top to bottom, then restart on an ending), so lookups always
    reflect what is drawn. When regions overlap the earliest registered wins.
    """

    def __init__(self) -> None:
        self._regions: List[HitRegion] = []

    def clear(self) -> None:
        self._regions.clear()

    def add(self, x: int, y: int, w: int, h: int, action: Action) -> HitRegion:
        region = HitRegion(int(x), int(y), max(0, int(w)), max(0, int(h)), action)
        self._regions.append(region)
        return region

    def region_at(self, pos: Tuple[int, int]) -> Optional[HitRegion]:
        for r in self._regions:
            if r.contains(pos):
                return r
        return None

    def contains(self, pos: Tuple[int, int]) -> bool:
        return self.region_at(pos) is not None

    def actions(self) -> List[Action]:
        return [r.action for r in self._regions]

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[HitRegion]:
        return iter(self._regions)
