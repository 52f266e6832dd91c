from __future__ import annotations
import logging
from typing import Any, Optional

from engine.hit_regions import Action, Navigate, Restart
from engine.narrative.graph import StoryGraph
from engine.narrative.types import NodeId, NodeState, StoryNode

logger = logging.getLogger(__name__)


class StorySession:
    """
    Navigation state for one play-through: which node is current, where the
    story started, and which illustration is on screen. Only resolved click
    actions move it (see apply()).
    """

    def __init__(self, graph: StoryGraph, start: Optional[NodeId] = None) -> None:
        graph.freeze()
        self.graph = graph
        self.start: NodeId = graph.start if start is None else start
        self.current: NodeId = self.start
        self.displayed_image: Any | None = self.start_node.image

    @property
    def current_node(self) -> StoryNode:
        return self.graph.node(self.current)

    @property
    def start_node(self) -> StoryNode:
        return self.graph.node(self.start)

    @property
    def state(self) -> NodeState:
        return self.current_node.state

    # --- transitions --------------------------------------------------------
    def choose(self, choice_index: int) -> NodeId:
        target = self.graph.follow(self.current, choice_index)
        logger.debug("choice %d: node %d -> %d", choice_index, self.current, target)
        self.current = target
        # Images do not carry over: a node without one clears the display
        self.displayed_image = self.graph.node(target).image
        return target

    def restart(self) -> None:
        logger.info("restarting story at node %d", self.start)
        self.current = self.start
        self.displayed_image = self.start_node.image

    def apply(self, action: Action) -> None:
        if isinstance(action, Navigate):
            self.choose(action.choice_index)
        elif isinstance(action, Restart):
            self.restart()
        else:
            raise ValueError(f"session cannot apply action {action!r}")
