from .attributes import Attributes
from .collection import Collection, EdgeCollection, VertexCollection, VertexReplacementMap
from .graph import Edge, Graph, Vertex
from .structure import EdgeType
from .walk import Walk

__all__ = [
    "Attributes",
    "Collection",
    "Edge",
    "EdgeCollection",
    "EdgeType",
    "Graph",
    "Vertex",
    "VertexCollection",
    "VertexReplacementMap",
    "Walk",
]
