from __future__ import annotations
from typing import Any, Iterator, List, Optional

from engine.narrative.types import Choice, NodeId, NodeState, StoryNode


class StoryGraph:
    """
    Arena of story nodes addressed by stable integer ids.

    Building is two-step: add every node first, then link them with
    add_choice() in the order the choices should be shown. Cycles, self-loops
    and shared targets are all fine; nothing is validated beyond the ids
    existing. Once frozen (a session has started on it) the graph is read-only.
    """

    def __init__(self) -> None:
        self._nodes: List[StoryNode] = []
        self._start: Optional[NodeId] = None
        self._frozen = False

    # --- construction -------------------------------------------------------
    def add_node(self, text: str, image: Any | None = None) -> NodeId:
        self._check_mutable()
        self._nodes.append(StoryNode(text=text, image=image))
        nid = len(self._nodes) - 1
        if self._start is None:
            self._start = nid
        return nid

    def add_choice(self, source: NodeId, label: str, description: str, target: NodeId) -> Choice:
        self._check_mutable()
        node = self.node(source)
        self.node(target)  # raises on an unknown target
        ch = Choice(label=label, description=description, target=target)
        node.choices.append(ch)
        return ch

    def set_start(self, node_id: NodeId) -> None:
        self._check_mutable()
        self.node(node_id)
        self._start = node_id

    def freeze(self) -> None:
        self._frozen = True

    # --- traversal ----------------------------------------------------------
    @property
    def start(self) -> NodeId:
        if self._start is None:
            raise LookupError("story graph has no nodes")
        return self._start

    def node(self, node_id: NodeId) -> StoryNode:
        if not isinstance(node_id, int) or node_id < 0 or node_id >= len(self._nodes):
            raise KeyError(f"unknown story node id: {node_id!r}")
        return self._nodes[node_id]

    def state(self, node_id: NodeId) -> NodeState:
        return self.node(node_id).state

    def follow(self, node_id: NodeId, choice_index: int) -> NodeId:
        """ Target of the choice at `choice_index` on `node_id`. """
        return self.node(node_id).choices[choice_index].target

    def endings(self) -> List[NodeId]:
        return [i for i, n in enumerate(self._nodes) if n.state is NodeState.TERMINAL]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[StoryNode]:
        return iter(self._nodes)

    # --- internals ----------------------------------------------------------
    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("story graph is frozen; nodes and choices can no longer change")
