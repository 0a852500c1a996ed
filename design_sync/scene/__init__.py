"""Scene-graph emission of variant matrices."""

from .document import DocumentSceneGraph
from .emitter import EmitSummary, SceneEmitter
from .protocol import NodeId, SceneGraph

__all__ = [
    "DocumentSceneGraph",
    "EmitSummary",
    "NodeId",
    "SceneEmitter",
    "SceneGraph",
]
