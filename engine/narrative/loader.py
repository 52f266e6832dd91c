from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import yaml

from engine.narrative.graph import StoryGraph
from engine.narrative.types import NodeId
from engine.resources import project_path

logger = logging.getLogger(__name__)

ImageLoader = Callable[[str], Any]


class StoryFormatError(ValueError):
    """ Story content file is malformed (bad structure, unknown node keys). """


def _text(raw: Any) -> str:
    # text: allow str or list[str] (joined into one paragraph block)
    if isinstance(raw, list):
        return "\n".join(str(s) for s in raw)
    if raw is None:
        return ""
    return str(raw)

def load_story_file(path: str, image_loader: Optional[ImageLoader] = None) -> Tuple[StoryGraph, Dict[str, NodeId]]:
    """
    Loads a YAML story file:
        title: <str>            (optional)
        start: <key>            (optional; defaults to the first node)
        nodes: { <key>: {text: <str or list>, image: <relpath>?, choices: [{label, description, goto}]} }
    Returns the graph and a key -> NodeId map.

    Nodes are all created before any choice is linked, so `goto` may point
    forward or back (cycles are fine). `image_loader` turns an image relpath
    into a bitmap; asset errors it raises propagate.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise StoryFormatError(f"{path}: top level must be a mapping")
    return build_story(data, image_loader=image_loader, source=path)

def build_story(data: Dict[str, Any], image_loader: Optional[ImageLoader] = None, source: str = "<story>") -> Tuple[StoryGraph, Dict[str, NodeId]]:
    raw_nodes = data.get("nodes", {})
    if not isinstance(raw_nodes, dict) or not raw_nodes:
        raise StoryFormatError(f"{source}: 'nodes' must be a non-empty mapping")

    graph = StoryGraph()
    ids: Dict[str, NodeId] = {}

    # Pass 1: nodes (YAML preserves order)
    for key, body in raw_nodes.items():
        if not isinstance(body, dict):
            raise StoryFormatError(f"{source}: node '{key}' must be a mapping")
        image = None
        img_path = body.get("image")
        if img_path:
            if image_loader is None:
                raise StoryFormatError(f"{source}: node '{key}' has an image but no image loader was given")
            image = image_loader(str(img_path))
        ids[str(key)] = graph.add_node(_text(body.get("text")), image=image)

    # Pass 2: choices, in display order
    for key, body in raw_nodes.items():
        choices = body.get("choices", []) or []
        if not isinstance(choices, list):
            raise StoryFormatError(f"{source}: node '{key}' choices must be a list")
        for idx, c in enumerate(choices):
            if not isinstance(c, dict):
                raise StoryFormatError(f"{source}: node '{key}' choice {idx} must be a mapping")
            goto = str(c.get("goto") or "").strip()
            if goto not in ids:
                raise StoryFormatError(f"{source}: node '{key}' choice {idx} goes to unknown node '{goto}'")
            graph.add_choice(ids[str(key)], str(c.get("label") or ""), str(c.get("description") or ""), ids[goto])

    start = data.get("start")
    if start is not None:
        if str(start) not in ids:
            raise StoryFormatError(f"{source}: start node '{start}' does not exist")
        graph.set_start(ids[str(start)])

    logger.info("loaded story %s: %d nodes, %d endings", data.get("title") or source, len(graph), len(graph.endings()))
    return graph, ids

def default_story_path(rel: str) -> str:
    """ Resolve a project-relative story path when run from elsewhere. """
    p = Path(rel)
    if p.is_absolute() or p.exists():
        return str(p)
    return project_path(rel)
