"""Minimum spanning tree algorithms: Kruskal and Prim.

Both work on undirected graphs only and fail on disconnected ones.

References:
    - https://en.wikipedia.org/wiki/Kruskal%27s_algorithm
    - https://en.wikipedia.org/wiki/Prim%27s_algorithm
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import numpy as np

from ..core.collection import EdgeCollection
from ..core.graph import Edge, Graph
from ..exceptions import DisconnectedGraphError, EmptyGraphError
from ._queue import PriorityQueue

logger = logging.getLogger(__name__)


class MinimumSpanningTree(ABC):
    """Base class for minimum spanning tree algorithms.

    Parameters
    ----------
    graph : Graph
        Undirected graph to span.

    Raises
    ------
    ValueError
        If the graph has any directed edge.

    """

    WEIGHT = "weight"
    DEFAULT_WEIGHT = 0

    def __init__(self, graph: Graph):
        if graph.has_directed():
            raise ValueError("Cannot create MST for directed graph")
        self._graph = graph

    def _weight(self, edge: Edge):
        return edge.get_attribute(self.WEIGHT, self.DEFAULT_WEIGHT)

    @abstractmethod
    def get_edges(self) -> EdgeCollection:
        """Edges of the minimum spanning tree.

        Raises
        ------
        DisconnectedGraphError
            If the graph is not connected.

        """

    def create_graph(self) -> Graph:
        """Independent graph holding only the spanning tree edges."""
        return self._graph.new_from_edges(self.get_edges())


class Kruskal(MinimumSpanningTree):
    """Kruskal's algorithm.

    Edges are taken cheapest first; an edge is accepted unless both of its
    endpoints already sit in the same forest. Forests touched by an accepted
    edge are merged.
    """

    def get_edges(self) -> EdgeCollection:
        queue = PriorityQueue()
        for edge in self._graph.get_edges():
            if not edge.is_loop():
                queue.insert(edge, self._weight(edge))

        edges = EdgeCollection()
        forests = []  # disjoint sets of vertex ids

        while queue:
            edge = queue.extract()
            a = edge.get_from().get_id()
            b = edge.get_to().get_id()
            forest_a = next((forest for forest in forests if a in forest), None)
            forest_b = next((forest for forest in forests if b in forest), None)

            if forest_a is not None and forest_a is forest_b:
                continue

            if forest_a is None and forest_b is None:
                forest = set()
                forests.append(forest)
            elif forest_b is None:
                forest = forest_a
            elif forest_a is None:
                forest = forest_b
            else:
                forest_a |= forest_b
                forests = [f for f in forests if f is not forest_b]
                forest = forest_a

            forest.update((a, b))
            edges.add(edge)

        vertex_count = len(self._graph.get_vertices())
        if len(edges) != vertex_count - 1:
            raise DisconnectedGraphError("Graph is not connected")

        logger.debug("kruskal selected %d edges", len(edges))
        return edges


class Prim(MinimumSpanningTree):
    """Prim's algorithm, grown from a randomly chosen start vertex.

    Parameters
    ----------
    graph : Graph
        Undirected graph to span.
    seed : int | numpy.random.Generator, optional
        Seed for the start vertex choice.

    Raises
    ------
    ValueError
        If the graph has any directed edge.
    EmptyGraphError
        If the graph is empty.

    """

    def __init__(self, graph: Graph, seed=None):
        super().__init__(graph)
        vertices = graph.get_vertices().all()
        if not vertices:
            raise EmptyGraphError("Graph is empty")
        rng = np.random.default_rng(seed)
        self._start_vertex = vertices[int(rng.integers(len(vertices)))]

    def get_edges(self) -> EdgeCollection:
        queue = PriorityQueue()
        edges = EdgeCollection()
        current = self._start_vertex
        marked = set()

        for _ in range(len(self._graph.get_vertices()) - 1):
            marked.add(current.get_id())

            for edge in current.get_edges_out():
                if not edge.is_loop():
                    queue.insert(edge, self._weight(edge))

            # discard edges with both or neither endpoint inside the tree
            while True:
                try:
                    cheapest = queue.extract()
                except IndexError as exc:
                    raise DisconnectedGraphError("Graph has more than one component") from exc
                from_marked = cheapest.get_from().get_id() in marked
                to_marked = cheapest.get_to().get_id() in marked
                if from_marked != to_marked:
                    break

            edges.add(cheapest)
            current = cheapest.get_to() if from_marked else cheapest.get_from()

        logger.debug("prim selected %d edges from vertex %s", len(edges), self._start_vertex.get_id())
        return edges
