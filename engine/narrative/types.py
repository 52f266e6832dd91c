from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List

NodeId = int    # Stable index into StoryGraph's node arena


class NodeState(Enum):
    BRANCHING = "branching"
    TERMINAL = "terminal"       # No outgoing choices: an ending


@dataclass(eq=False)
class Choice:
    label: str
    description: str
    target: NodeId

    @property
    def caption(self) -> str:
        """ On-screen text, e.g. 'Look around: You try to find another guide'. """
        return f"{self.label}: {self.description}"


@dataclass(eq=False)
class StoryNode:
    text: str
    choices: List[Choice] = field(default_factory=list)
    image: Any | None = None    # Opaque bitmap handle (pygame.Surface at runtime)

    @property
    def state(self) -> NodeState:
        return NodeState.TERMINAL if not self.choices else NodeState.BRANCHING
