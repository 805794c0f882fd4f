"""Single-source shortest path algorithms.

All three algorithms build a shortest-path tree rooted at the source vertex and
answer path, distance and reachability queries from it. Results are cached per
instance and recomputed automatically once the graph's version changes.

References:
    - https://en.wikipedia.org/wiki/Breadth-first_search
    - https://en.wikipedia.org/wiki/Dijkstra%27s_algorithm
    - https://en.wikipedia.org/wiki/Bellman%E2%80%93Ford_algorithm
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque

from ..core.collection import EdgeCollection
from ..core.graph import Edge, Graph, Vertex
from ..core.walk import Walk
from ..exceptions import NegativeCycleError, NoNegativeCycleError, UnreachableVertexError
from ._queue import PriorityQueue

logger = logging.getLogger(__name__)


class ShortestPath(ABC):
    """Common query surface of the shortest path algorithms.

    Parameters
    ----------
    vertex : Vertex
        Source vertex.

    Notes
    -----
    - Edge weights are read from the ``WEIGHT`` attribute, ``DEFAULT_WEIGHT`` when unset.
    - ``get_edges_to``/``get_walk_to``/``get_distance`` raise
      :class:`~mathgraph.exceptions.UnreachableVertexError` (a ``KeyError``) for
      unreachable vertices and vertices of another graph.

    """

    WEIGHT = "weight"
    DEFAULT_WEIGHT = 0

    def __init__(self, vertex: Vertex):
        self._vertex = vertex
        self._cache = None
        self._cache_version = None

    def _weight(self, edge: Edge):
        return edge.get_attribute(self.WEIGHT, self.DEFAULT_WEIGHT)

    def _graph(self) -> Graph:
        return self._vertex.get_graph()

    def _cached(self, compute):
        """INTERNAL: Return the cached result, recomputing it if the graph changed since."""
        graph = self._graph()
        if self._cache is None or graph.dirty_since(self._cache_version):
            if self._cache is not None:
                logger.debug("graph changed since last query; recomputing %s", type(self).__name__)
            self._cache = compute()
            self._cache_version = graph.get_version()
        return self._cache

    @abstractmethod
    def _find_edges_to(self, vertex: Vertex) -> list | None:
        """INTERNAL: Path edges from the source to ``vertex`` in order, or None if unreachable."""

    @abstractmethod
    def get_edges(self) -> EdgeCollection:
        """All edges of the shortest-path tree."""

    def _distance(self, edges: list):
        return sum(self._weight(edge) for edge in edges)

    def get_edges_to(self, vertex: Vertex) -> EdgeCollection:
        """Edges on the shortest path to ``vertex``, in walking order.

        Raises
        ------
        UnreachableVertexError
            If there is no path to ``vertex``.

        """
        edges = self._find_edges_to(vertex)
        if edges is None:
            raise UnreachableVertexError(f"no path to vertex {vertex.get_id()}")
        return EdgeCollection(edges)

    def get_walk_to(self, vertex: Vertex) -> Walk:
        return Walk(self._vertex, self.get_edges_to(vertex).ordered())

    def has_vertex(self, vertex: Vertex) -> bool:
        """True if ``vertex`` is reachable from the source."""
        return self._find_edges_to(vertex) is not None

    def get_distance(self, vertex: Vertex):
        """Total weight of the shortest path to ``vertex``."""
        return self._distance(self.get_edges_to(vertex).ordered())

    def get_distance_map(self) -> dict:
        """``{vertex_id: distance}`` for every vertex reachable from the source."""
        distances = {}
        for vertex in self._graph().get_vertices():
            edges = self._find_edges_to(vertex)
            if edges is not None:
                distances[vertex.get_id()] = self._distance(edges)
        return distances

    def create_graph(self) -> Graph:
        """Independent graph holding only the shortest-path tree."""
        return self._graph().new_from_edges(self.get_edges())


class BreadthFirst(ShortestPath):
    """Least-hops shortest path; edge weights are ignored and distance is the edge count."""

    def _distance(self, edges: list):
        return len(edges)

    def _build_edges_map(self) -> dict:
        start = self._vertex
        edges = {start.get_id(): []}
        queue = deque()
        current = start

        while current is not None:
            for edge in current.get_edges_out():
                target = edge.get_to() if edge.is_directed() else edge.get_adjacent_vertex(current)
                tid = target.get_id()
                if tid not in edges:
                    queue.append(target)
                    edges[tid] = edges[current.get_id()] + [edge]
            current = queue.popleft() if queue else None

        return edges

    def get_edges_map(self) -> dict:
        """``{vertex_id: [edges on the path]}`` for every reachable vertex."""
        return self._cached(self._build_edges_map)

    def _find_edges_to(self, vertex: Vertex) -> list | None:
        if vertex.get_graph() is not self._graph():
            return None
        return self.get_edges_map().get(vertex.get_id())

    def get_edges(self) -> EdgeCollection:
        all_edges = EdgeCollection()
        for edges in self.get_edges_map().values():
            for edge in edges:
                all_edges.add(edge)
        return all_edges


class _TreeShortestPath(ShortestPath):
    """INTERNAL: Shared path reconstruction for algorithms producing a predecessor tree.

    Subclasses compute ``{vertex_id: edge from the predecessor}``; paths are read
    back by following those edges from the target to the source.

    """

    @abstractmethod
    def _tree(self) -> dict:
        """INTERNAL: ``{vertex_id: tree edge leading into that vertex}``."""

    def _cheapest_edge(self, predecessor: Vertex, vertex: Vertex) -> Edge | None:
        """INTERNAL: Lowest-weight edge leading from ``predecessor`` to ``vertex``."""
        cheapest = None
        for edge in predecessor.get_edges_out():
            if edge.get_to() is vertex or (not edge.is_directed() and edge.get_from() is vertex):
                if cheapest is None or self._weight(edge) < self._weight(cheapest):
                    cheapest = edge
        return cheapest

    def _tree_from_predecessors(self, predecessors: dict) -> dict:
        tree = {}
        for vertex in self._graph().get_vertices():
            predecessor = predecessors.get(vertex.get_id())
            if predecessor is None:
                continue
            edge = self._cheapest_edge(predecessor, vertex)
            if edge is not None:
                tree[vertex.get_id()] = edge
        return tree

    def _find_edges_to(self, vertex: Vertex) -> list | None:
        if vertex.get_graph() is not self._graph():
            return None
        if vertex is self._vertex:
            return []

        tree = self._tree()
        path = []
        current = vertex
        while current is not self._vertex:
            edge = tree.get(current.get_id())
            if edge is None or len(path) > len(tree):
                return None
            path.append(edge)
            current = edge.get_adjacent_vertex(current)
        path.reverse()
        return path

    def get_edges(self) -> EdgeCollection:
        return EdgeCollection(self._tree().values())


class Dijkstra(_TreeShortestPath):
    """Dijkstra's algorithm for graphs with non-negative weights.

    Parameters
    ----------
    vertex : Vertex
        Source vertex.

    Raises
    ------
    ValueError
        If any edge of the graph (reachable or not) has a negative weight, at
        construction or when a query recomputes after the graph changed.

    """

    def __init__(self, vertex: Vertex):
        super().__init__(vertex)
        self._check_weights()

    def _check_weights(self):
        for edge in self._graph().get_edges():
            weight = self._weight(edge)
            if weight < 0:
                raise ValueError(
                    f"Dijkstra requires non-negative weights. "
                    f"Found negative weight {weight} on edge {edge.get_id()}"
                )

    def _compute(self) -> dict:
        # weights may have changed since construction
        self._check_weights()
        source = self._vertex
        cost_to = {source.get_id(): 0}
        predecessors = {}
        finalized = set()

        queue = PriorityQueue()
        queue.insert(source, 0)

        while queue:
            current = queue.extract()
            cid = current.get_id()
            if cid in finalized:
                continue
            finalized.add(cid)

            for edge in current.get_edges_out():
                target = edge.get_to() if edge.is_directed() else edge.get_adjacent_vertex(current)
                tid = target.get_id()
                if tid in finalized:
                    continue

                new_cost = cost_to[cid] + self._weight(edge)
                if tid not in cost_to or cost_to[tid] > new_cost:
                    cost_to[tid] = new_cost
                    predecessors[tid] = current
                    queue.insert(target, new_cost)

        tree = self._tree_from_predecessors(predecessors)
        logger.debug("dijkstra settled %d vertices from vertex %s", len(finalized), source.get_id())
        return tree

    def _tree(self) -> dict:
        return self._cached(self._compute)


class MooreBellmanFord(_TreeShortestPath):
    """Moore-Bellman-Ford algorithm; handles negative weights and detects negative cycles.

    Undirected edges are relaxed in both directions, so a single undirected edge
    with negative weight already forms a negative cycle.

    """

    def _relax(self, edges, cost_to: dict, predecessors: dict):
        """INTERNAL: One relaxation pass over ``edges``; returns the last vertex whose cost dropped."""
        changed = None
        for edge in edges:
            weight = self._weight(edge)
            for to_vertex in edge.get_targets():
                from_vertex = edge.get_adjacent_vertex(to_vertex)
                fid = from_vertex.get_id()
                if fid not in cost_to:
                    continue
                new_cost = cost_to[fid] + weight
                tid = to_vertex.get_id()
                if tid not in cost_to or cost_to[tid] > new_cost:
                    changed = to_vertex
                    cost_to[tid] = new_cost
                    predecessors[tid] = from_vertex
        return changed

    def _find_cycle(self, changed: Vertex, predecessors: dict, vertex_count: int) -> Walk:
        """INTERNAL: Follow predecessor links from ``changed`` into the cycle and return it."""
        # |V| steps back is guaranteed to land on the cycle itself
        start = changed
        for _ in range(vertex_count):
            start = predecessors[start.get_id()]

        edges = []
        seen = set()
        current = start
        while current.get_id() not in seen:
            seen.add(current.get_id())
            predecessor = predecessors[current.get_id()]
            edges.append(self._cheapest_edge(predecessor, current))
            current = predecessor

        edges.reverse()
        return Walk(current, edges)

    def _compute(self) -> tuple:
        graph = self._graph()
        vertices = graph.get_vertices()
        edges = graph.get_edges()

        cost_to = {self._vertex.get_id(): 0}
        predecessors = {}

        changed = None
        for _ in range(len(vertices)):
            changed = self._relax(edges, cost_to, predecessors)
            if changed is None:
                break

        if changed is not None:
            changed = self._relax(edges, cost_to, predecessors) or changed
            cycle = self._find_cycle(changed, predecessors, len(vertices))
            logger.warning(
                "negative cycle of %d edges reachable from vertex %s",
                len(cycle),
                self._vertex.get_id(),
            )
            return None, cycle

        tree = self._tree_from_predecessors(predecessors)
        logger.debug("bellman-ford reached %d vertices from vertex %s", len(cost_to), self._vertex.get_id())
        return tree, None

    def _tree(self) -> dict:
        tree, cycle = self._cached(self._compute)
        if cycle is not None:
            raise NegativeCycleError("Negative cycle found", cycle)
        return tree

    def get_cycle_negative(self) -> Walk:
        """The negative cycle reachable from the source.

        Raises
        ------
        NoNegativeCycleError
            If there is no such cycle.

        """
        _, cycle = self._cached(self._compute)
        if cycle is None:
            raise NoNegativeCycleError("No cycle found")
        return cycle
