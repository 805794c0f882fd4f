from __future__ import annotations

import logging

import numpy as np

from ..core.collection import EdgeCollection
from ..core.graph import Edge, Graph, Vertex
from ..exceptions import DisconnectedGraphError, EmptyGraphError
from ._queue import PriorityQueue

logger = logging.getLogger(__name__)


class NearestNeighbor:
    """Nearest neighbour heuristic for the traveling salesman problem.

    From the start vertex, repeatedly follow the cheapest edge to a vertex not
    visited yet, then close the tour with the cheapest unused edge back to the
    start.

    See https://en.wikipedia.org/wiki/Nearest_neighbour_algorithm

    Parameters
    ----------
    graph : Graph
        Graph to tour.
    seed : int | numpy.random.Generator, optional
        Seed for the random start vertex; see also :meth:`set_start_vertex`.

    Raises
    ------
    EmptyGraphError
        If the graph has no vertex.

    """

    WEIGHT = "weight"
    DEFAULT_WEIGHT = 0

    def __init__(self, graph: Graph, seed=None):
        self._graph = graph
        vertices = graph.get_vertices().all()
        if not vertices:
            raise EmptyGraphError("Graph is empty")
        rng = np.random.default_rng(seed)
        self._start_vertex = vertices[int(rng.integers(len(vertices)))]

    def _weight(self, edge: Edge):
        return edge.get_attribute(self.WEIGHT, self.DEFAULT_WEIGHT)

    def set_start_vertex(self, vertex: Vertex) -> None:
        self._start_vertex = vertex

    def get_start_vertex(self) -> Vertex:
        return self._start_vertex

    def create_graph(self) -> Graph:
        """Independent graph holding only the tour edges."""
        return self._graph.new_from_edges(self.get_edges())

    def get_edges(self) -> EdgeCollection:
        """Edges of the tour.

        Raises
        ------
        DisconnectedGraphError
            If some vertex cannot be reached or the tour cannot be closed.

        """
        start = self._start_vertex
        edges = EdgeCollection()
        current = start
        marked = set()
        vertex_count = len(self._graph.get_vertices())

        for _ in range(vertex_count - 1):
            marked.add(current.get_id())

            queue = PriorityQueue()
            for edge in current.get_edges_out():
                if not edge.is_loop():
                    queue.insert(edge, self._weight(edge))

            while True:
                try:
                    cheapest = queue.extract()
                except IndexError as exc:
                    raise DisconnectedGraphError("Graph has more than one component") from exc
                if not (
                    cheapest.get_from().get_id() in marked and cheapest.get_to().get_id() in marked
                ):
                    break

            edges.add(cheapest)
            if cheapest.get_from().get_id() in marked:
                current = cheapest.get_to()
            else:
                current = cheapest.get_from()

        # try to connect back to the start vertex
        if current.get_vertices().contains(start):
            queue = PriorityQueue()
            for edge in current.get_edges_out():
                if not edge.is_loop() and not edges.contains_edge(edge):
                    queue.insert(edge, self._weight(edge))

            while queue:
                cheapest = queue.extract()
                if cheapest.get_vertices().contains(start):
                    edges.add(cheapest)
                    break

        if len(edges) != vertex_count:
            raise DisconnectedGraphError("Graph is not connected")

        logger.debug("nearest neighbour tour of %d edges from vertex %s", len(edges), start.get_id())
        return edges
