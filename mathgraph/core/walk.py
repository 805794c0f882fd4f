from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .collection import EdgeCollection, VertexCollection

if TYPE_CHECKING:
    from .graph import Edge, Graph, Vertex


class Walk:
    """An alternating sequence of vertices and edges.

    A trail is a walk whose edges are distinct; a path is a trail whose vertices
    are distinct (except possibly the first and last). Walks are immutable once
    built.

    Parameters
    ----------
    start_vertex : Vertex
        Vertex the walk starts from.
    edges : Iterable[Edge]
        Edges in traversal order; an edge may appear more than once.

    """

    def __init__(self, start_vertex: Vertex, edges: Iterable[Edge]):
        self._start_vertex = start_vertex
        self._edges = list(edges)
        self._vertices = VertexCollection([start_vertex])
        self._graph = None

        current = start_vertex
        self._alternating_sequence = [current]
        for edge in self._edges:
            current = edge.get_adjacent_vertex(current)
            self._vertices.add(current)
            self._alternating_sequence.append(edge)
            self._alternating_sequence.append(current)

    def __len__(self) -> int:
        return len(self._edges)

    def __repr__(self):
        return f"Walk(start={self._start_vertex!r}, edges={len(self._edges)})"

    def get_graph(self) -> Graph:
        """The graph the walk runs through."""
        return self._start_vertex.get_graph()

    def get_start_vertex(self) -> Vertex:
        return self._start_vertex

    def get_end_vertex(self) -> Vertex:
        return self._alternating_sequence[-1]

    def create_graph(self) -> Graph:
        """Deep copy of the walked edges as a standalone graph (built once, then cached)."""
        if self._graph is None:
            self._graph = self.get_graph().new_from_edges(self._edges)
        return self._graph

    def get_edges(self) -> EdgeCollection:
        """Edges of the walk; ``ordered()`` on the result replays repeated edges."""
        return EdgeCollection(self._edges)

    def get_vertices(self) -> VertexCollection:
        return VertexCollection(self._vertices)

    def get_alternating_sequence(self) -> list:
        """``[V1, E1, V2, ..., Vn]``"""
        return list(self._alternating_sequence)
