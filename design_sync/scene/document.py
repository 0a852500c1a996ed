"""In-memory scene graph that records nodes as a JSON-serializable tree."""

import itertools
import json
from pathlib import Path
from typing import Any

from ..sync_logging import LogCategory, get_category_logger
from .protocol import NodeId

logger = get_category_logger(LogCategory.SCENE)


class DocumentSceneGraph:
    """A ``SceneGraph`` that builds a plain document instead of live nodes."""

    def __init__(self) -> None:
        self.nodes: dict[NodeId, dict[str, Any]] = {}
        self.roots: list[NodeId] = []
        self.calls: list[str] = []
        self._ids = itertools.count(1)

    def _new(self, kind: str, name: str, x: float, y: float, **attrs: Any) -> NodeId:
        node_id = f"{kind}:{next(self._ids)}"
        self.nodes[node_id] = {
            "id": node_id,
            "type": kind,
            "name": name,
            "x": x,
            "y": y,
            "children": [],
            **attrs,
        }
        self.roots.append(node_id)
        return node_id

    def _node(self, node: NodeId) -> dict[str, Any]:
        try:
            return self.nodes[node]
        except KeyError:
            raise ValueError(f"Unknown scene node {node!r}") from None

    async def create_frame(
        self, name: str, x: float, y: float, width: float, height: float
    ) -> NodeId:
        self.calls.append("create_frame")
        return self._new("FRAME", name, x, y, width=width, height=height)

    async def create_text(self, text: str, x: float, y: float, font_size: float) -> NodeId:
        self.calls.append("create_text")
        return self._new("TEXT", text, x, y, characters=text, fontSize=font_size)

    async def create_component(
        self, name: str, x: float, y: float, width: float, height: float
    ) -> NodeId:
        self.calls.append("create_component")
        return self._new("COMPONENT", name, x, y, width=width, height=height)

    async def append_child(self, parent: NodeId, child: NodeId) -> None:
        self.calls.append("append_child")
        parent_node = self._node(parent)
        self._node(child)
        if child in self.roots:
            self.roots.remove(child)
        parent_node["children"].append(child)

    async def resize(self, node: NodeId, width: float, height: float) -> None:
        self.calls.append("resize")
        target = self._node(node)
        target["width"] = width
        target["height"] = height

    async def set_corner_radius(self, node: NodeId, radius: float) -> None:
        self.calls.append("set_corner_radius")
        self._node(node)["cornerRadius"] = radius

    async def bind_fill_to_token(self, node: NodeId, token: str) -> None:
        self.calls.append("bind_fill_to_token")
        self._node(node)["fill"] = token

    async def bind_stroke_to_token(self, node: NodeId, token: str, weight: float) -> None:
        self.calls.append("bind_stroke_to_token")
        target = self._node(node)
        target["stroke"] = token
        target["strokeWeight"] = weight

    async def bind_text_color_to_token(self, node: NodeId, token: str) -> None:
        self.calls.append("bind_text_color_to_token")
        self._node(node)["textColor"] = token

    def tree(self, node: NodeId) -> dict[str, Any]:
        """Nested dict for ``node`` and its descendants."""
        data = dict(self._node(node))
        data["children"] = [self.tree(child) for child in data["children"]]
        return data

    def to_dict(self) -> dict[str, Any]:
        return {"nodes": [self.tree(root) for root in self.roots]}

    def write(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8")
        logger.info(f"Wrote scene document with {len(self.nodes)} nodes to {path}")
        return path
