"""Reachability search from a single vertex.

Both searches follow outgoing adjacency only (``Vertex.get_vertices_to``):
directed edges are followed forward, undirected edges both ways.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque

from ..core.collection import VertexCollection
from ..core.graph import Vertex

logger = logging.getLogger(__name__)


class Search(ABC):
    """Base class for searches starting at ``vertex``."""

    def __init__(self, vertex: Vertex):
        self._vertex = vertex

    @abstractmethod
    def get_vertices(self) -> VertexCollection:
        """Every reachable vertex, start included, each exactly once."""


class BreadthFirst(Search):
    """Breadth first search.

    See https://en.wikipedia.org/wiki/Breadth-first_search
    """

    def get_vertices(self) -> VertexCollection:
        queue = deque([self._vertex])
        marked = {self._vertex.get_id()}
        visited = VertexCollection()

        while queue:
            current = queue.popleft()
            visited.add(current)
            for vertex in current.get_vertices_to():
                if vertex.get_id() not in marked:
                    marked.add(vertex.get_id())
                    queue.append(vertex)

        logger.debug("breadth first search visited %d vertices", len(visited))
        return visited


class DepthFirst(Search):
    """Depth first search.

    Neighbours are appended in reverse order to a single work queue that is
    consumed from the front; the visited map keeps each vertex from being
    expanded twice.

    See https://en.wikipedia.org/wiki/Depth-first_search
    """

    def get_vertices(self) -> VertexCollection:
        visited = VertexCollection()
        queue = deque([self._vertex])

        while queue:
            vertex = queue.popleft()
            if visited.contains(vertex):
                continue
            visited.add(vertex)
            for next_vertex in reversed(vertex.get_vertices_to().all()):
                queue.append(next_vertex)

        logger.debug("depth first search visited %d vertices", len(visited))
        return visited
