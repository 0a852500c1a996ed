"""Scene-graph interface consumed by the emitter.

Three node constructors plus seven primitives. Implementations talk to a
design tool; the emitter never needs anything else.
"""

from typing import Protocol, runtime_checkable

NodeId = str


@runtime_checkable
class SceneGraph(Protocol):
    """Async scene-graph collaborator."""

    async def create_frame(
        self, name: str, x: float, y: float, width: float, height: float
    ) -> NodeId: ...

    async def create_text(
        self, text: str, x: float, y: float, font_size: float
    ) -> NodeId: ...

    async def create_component(
        self, name: str, x: float, y: float, width: float, height: float
    ) -> NodeId: ...

    async def append_child(self, parent: NodeId, child: NodeId) -> None: ...

    async def resize(self, node: NodeId, width: float, height: float) -> None: ...

    async def set_corner_radius(self, node: NodeId, radius: float) -> None: ...

    async def bind_fill_to_token(self, node: NodeId, token: str) -> None: ...

    async def bind_stroke_to_token(self, node: NodeId, token: str, weight: float) -> None: ...

    async def bind_text_color_to_token(self, node: NodeId, token: str) -> None: ...
