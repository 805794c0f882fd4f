from __future__ import annotations

import logging

import numpy as np
import polars as pl
import scipy.sparse as sp

from ..exceptions import CrossGraphError, EmptyGraphError
from ._state import _State, next_id
from .attributes import Attributes
from .collection import EdgeCollection, VertexCollection, VertexReplacementMap
from .structure import EdgeType

logger = logging.getLogger(__name__)


def _group_of(vertex) -> int:
    """INTERNAL: Integer ``group`` of ``vertex`` (0 when unset).

    Raises
    ------
    TypeError
        If the group is not an integer (integral floats are accepted).

    """
    value = vertex.get_attribute("group", 0)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"vertex {vertex.get_id()} has non-integer group {value!r}")
    return value


class Vertex(Attributes):
    """The fundamental unit of which graphs are formed.

    A vertex owns its adjacency: the edges leading in, the edges leading out and,
    for each of those edges, the vertex on the other side. Edges register
    themselves here on construction, so the two views always agree.

    Parameters
    ----------
    graph : Graph
        Owning graph; the vertex adds itself to it.
    attributes : dict, optional
        Initial attributes.

    """

    def __init__(self, graph: Graph, attributes=None):
        self._id = next_id()
        self._graph = None
        self._edges_in = {}  # edge_id -> Edge
        self._edges_out = {}
        self._edges_in_disabled = {}
        self._edges_out_disabled = {}
        self._adjacent_in = {}  # edge_id -> Vertex on the other side
        self._adjacent_out = {}
        self._init_attributes(attributes)
        self.set_graph(graph)

    def __repr__(self):
        name = self.get_attribute("name")
        if name is None:
            return f"Vertex({self._id})"
        return f"Vertex({self._id}, name={name!r})"

    def _attributes_changed(self):
        if self._graph is not None:
            self._graph._touch()

    def clone(self) -> Vertex:
        """Return a copy with a fresh id, the same attributes, no edges and no graph."""
        clone = type(self).__new__(type(self))
        clone._id = next_id()
        clone._graph = None
        clone._edges_in = {}
        clone._edges_out = {}
        clone._edges_in_disabled = {}
        clone._edges_out_disabled = {}
        clone._adjacent_in = {}
        clone._adjacent_out = {}
        clone._attributes = dict(self._attributes)
        return clone

    # Identity / ownership

    def get_id(self) -> int:
        return self._id

    def get_graph(self) -> Graph:
        return self._graph

    def set_graph(self, graph: Graph) -> None:
        """Re-parent this vertex into ``graph`` (no-op if it already belongs there)."""
        if self._graph is graph:
            return
        previous = self._graph
        self._graph = graph
        if previous is not None:
            previous._vertices.remove(self)
            previous._touch()
        graph.add_vertex(self)

    # Adjacency queries

    def get_edges(self) -> EdgeCollection:
        edges = EdgeCollection(self._edges_in.values())
        for edge in self._edges_out.values():
            if not edges.contains_edge(edge):
                edges.add(edge)
        return edges

    def get_edges_in(self) -> EdgeCollection:
        return EdgeCollection(self._edges_in.values())

    def get_edges_out(self) -> EdgeCollection:
        return EdgeCollection(self._edges_out.values())

    def get_disabled_edges_in(self) -> EdgeCollection:
        return EdgeCollection(self._edges_in_disabled.values())

    def get_disabled_edges_out(self) -> EdgeCollection:
        return EdgeCollection(self._edges_out_disabled.values())

    def get_vertices(self) -> VertexCollection:
        """Every vertex sharing an edge with this one; self only if a loop is attached."""
        vertices = VertexCollection()
        has_loop = False
        for edge in self.get_edges():
            if edge.is_loop():
                has_loop = True
            for vertex in edge.get_vertices():
                vertices.add(vertex)
        if not has_loop:
            vertices.remove(self)
        return vertices

    def get_vertices_from(self) -> VertexCollection:
        """Vertices this vertex can be reached from (other ends of the in-edges)."""
        return VertexCollection(self._adjacent_in.values())

    def get_vertices_to(self) -> VertexCollection:
        """Vertices reachable in one step (other ends of the out-edges)."""
        return VertexCollection(self._adjacent_out.values())

    # Edge construction

    def create_edge(self, vertex: Vertex, attributes=None) -> Edge:
        """Create an undirected edge between this vertex and ``vertex``."""
        return Edge(self, vertex, EdgeType.UNDIRECTED, attributes)

    def create_edge_to(self, vertex: Vertex, attributes=None) -> Edge:
        """Create a directed edge from this vertex to ``vertex``."""
        return Edge(self, vertex, EdgeType.DIRECTED, attributes)

    def add_edge_in(self, edge: Edge) -> None:
        """Register ``edge`` as leading into this vertex.

        Edges that do not actually end here (in the requested direction) are ignored.
        """
        if edge.is_directed() and edge.get_to() is not self:
            return
        if edge.get_from() is not self and edge.get_to() is not self:
            return
        eid = edge.get_id()
        self._adjacent_in[eid] = edge.get_adjacent_vertex(self)
        self._edges_in[eid] = edge

    def add_edge_out(self, edge: Edge) -> None:
        """Register ``edge`` as leading out of this vertex; ignored when it does not start here."""
        if edge.is_directed() and edge.get_from() is not self:
            return
        if edge.get_from() is not self and edge.get_to() is not self:
            return
        eid = edge.get_id()
        self._adjacent_out[eid] = edge.get_adjacent_vertex(self)
        self._edges_out[eid] = edge

    def remove_edge(self, edge: Edge, disable: bool = False) -> None:
        """Drop every reference to ``edge``; with ``disable`` keep it in the disabled sets."""
        eid = edge.get_id()
        if not disable:
            self._edges_in_disabled.pop(eid, None)
            self._edges_out_disabled.pop(eid, None)
        if eid in self._edges_in:
            if disable:
                self._edges_in_disabled[eid] = edge
            del self._edges_in[eid]
            del self._adjacent_in[eid]
        if eid in self._edges_out:
            if disable:
                self._edges_out_disabled[eid] = edge
            del self._edges_out[eid]
            del self._adjacent_out[eid]

    def disable_edge(self, edge: Edge) -> None:
        self.remove_edge(edge, disable=True)

    def enable_edge(self, edge: Edge) -> None:
        eid = edge.get_id()
        if self._edges_in_disabled.pop(eid, None) is not None:
            self.add_edge_in(edge)
        if self._edges_out_disabled.pop(eid, None) is not None:
            self.add_edge_out(edge)

    # Degree

    def degree(self) -> int:
        """Total number of incident edges, loops counted twice."""
        edges = self.get_edges()
        return len(edges) + sum(1 for edge in edges if edge.is_loop())

    def degree_in(self) -> int:
        return len(self._edges_in) + sum(
            1 for edge in self._edges_out.values() if edge.is_loop() and not edge.is_directed()
        )

    def degree_out(self) -> int:
        return len(self._edges_out) + sum(
            1 for edge in self._edges_in.values() if edge.is_loop() and not edge.is_directed()
        )

    def is_isolated(self) -> bool:
        return not self._edges_in and not self._edges_out

    def is_sink(self) -> bool:
        return not self._edges_out

    def is_source(self) -> bool:
        return not self._edges_in

    def destroy(self) -> None:
        """Destroy all incident edges, disabled ones included, and detach this vertex from its graph."""
        incident = {}
        for edges in (self._edges_in, self._edges_out, self._edges_in_disabled, self._edges_out_disabled):
            incident.update(edges)
        for edge in incident.values():
            edge.destroy()
        graph = self._graph
        if graph is not None:
            self._graph = None
            graph._vertices.remove(self)
            graph._touch()


class Edge(Attributes):
    """Connector between two vertices of the same graph.

    Parameters
    ----------
    from_vertex : Vertex
        Source vertex.
    to_vertex : Vertex
        Target vertex (may equal ``from_vertex``, forming a loop).
    direction : EdgeType
        ``EdgeType.DIRECTED`` (default) or ``EdgeType.UNDIRECTED``.
    attributes : dict, optional
        Initial attributes, e.g. ``{"weight": 3}``.

    Raises
    ------
    CrossGraphError
        If the two vertices belong to different graphs.

    """

    def __init__(self, from_vertex: Vertex, to_vertex: Vertex, direction=EdgeType.DIRECTED, attributes=None):
        if from_vertex.get_graph() is not to_vertex.get_graph():
            raise CrossGraphError("trying to create an edge cross graph")

        self._id = next_id()
        self._from = from_vertex
        self._to = to_vertex
        self._direction = EdgeType(direction)
        self._enabled = True
        self._destroyed = False
        self._init_attributes(attributes)
        self._register()
        self._touch_graph()

    def __repr__(self):
        arrow = "->" if self.is_directed() else "--"
        return f"Edge({self._id}: {self._from.get_id()}{arrow}{self._to.get_id()})"

    def _register(self):
        self._to.add_edge_in(self)
        self._from.add_edge_out(self)
        if not self.is_directed():
            self._to.add_edge_out(self)
            self._from.add_edge_in(self)

    def _touch_graph(self):
        graph = self._from.get_graph()
        if graph is not None:
            graph._touch()

    def _attributes_changed(self):
        if getattr(self, "_from", None) is not None:
            self._touch_graph()

    def clone(self) -> Edge:
        """Return a copy with a fresh id that still points at the old endpoints.

        The copy is not registered with any vertex until
        :meth:`replace_vertices_from_map` rewires it, and it starts out enabled
        since rewiring registers it in the live adjacency.
        """
        clone = type(self).__new__(type(self))
        clone._id = next_id()
        clone._from = self._from
        clone._to = self._to
        clone._direction = self._direction
        clone._enabled = True
        clone._destroyed = False
        clone._attributes = dict(self._attributes)
        return clone

    def get_id(self) -> int:
        return self._id

    def get_from(self) -> Vertex:
        return self._from

    def get_to(self) -> Vertex:
        return self._to

    def get_direction(self) -> EdgeType:
        return self._direction

    def get_adjacent_vertex(self, vertex: Vertex) -> Vertex:
        """Return the endpoint that is not ``vertex`` (``vertex`` itself for loops)."""
        return self._from if self._to is vertex else self._to

    def get_targets(self) -> VertexCollection:
        """Vertices this edge leads to: ``{to}`` if directed, ``{to, from}`` otherwise."""
        if self.is_directed():
            return VertexCollection([self._to])
        return VertexCollection([self._to, self._from])

    def get_vertices(self) -> VertexCollection:
        return VertexCollection([self._to, self._from])

    def replace_vertices_from_map(self, vertex_map: VertexReplacementMap) -> None:
        """Move this edge onto the replacement vertices found in ``vertex_map``.

        Endpoints missing from the map stay unchanged.
        """
        self._to.remove_edge(self)
        self._from.remove_edge(self)

        self._to = vertex_map.get(self._to, self._to)
        self._from = vertex_map.get(self._from, self._from)

        self._register()
        self._touch_graph()

    def is_directed(self) -> bool:
        return self._direction is EdgeType.DIRECTED

    def is_loop(self) -> bool:
        return self._from is self._to

    def is_enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        if self._enabled or self._destroyed:
            return
        self._enabled = True
        self._from.enable_edge(self)
        self._to.enable_edge(self)
        self._touch_graph()

    def disable(self) -> None:
        if not self._enabled or self._destroyed:
            return
        self._enabled = False
        self._from.disable_edge(self)
        self._to.disable_edge(self)
        self._touch_graph()

    def destroy(self) -> None:
        """Deregister this edge from both endpoints; a destroyed edge cannot be enabled again."""
        self._destroyed = True
        self._to.remove_edge(self)
        self._from.remove_edge(self)
        self._touch_graph()


class Graph(Attributes):
    """Representation of a mathematical graph.

    The graph owns its vertices; its edge set is not stored but derived from the
    vertices' adjacency, which every edge joins on construction.

    Parameters
    ----------
    **attributes
        Graph-level attributes.

    Notes
    -----
    - Every structural change (vertex added/removed, edge created, destroyed,
      enabled or disabled) and every vertex/edge attribute write bumps
      :meth:`get_version`. Cached algorithm results compare against it.

    """

    # Structural columns in the tabular views; attributes of the same name are dropped
    _VERTEX_RESERVED = {"vertex_id"}
    _EDGE_RESERVED = {"edge_id", "source", "target", "directed"}

    def __init__(self, **attributes):
        self._state = _State()
        self._vertices = VertexCollection()
        self._init_attributes(attributes)

    def __repr__(self):
        return f"Graph(vertices={len(self._vertices)}, edges={len(self.get_edges())})"

    def _touch(self):
        self._state.bump()

    def get_version(self) -> int:
        return self._state.version

    def dirty_since(self, version: int) -> bool:
        """True if the graph changed after ``version`` was read."""
        return self._state.dirty_since(version)

    # Build graph

    def new_vertex(self, attributes=None) -> Vertex:
        """Create a new vertex in this graph."""
        return Vertex(self, attributes)

    def add_vertex(self, vertex: Vertex) -> None:
        """Add ``vertex`` to this graph, re-parenting it if it belongs elsewhere."""
        self._vertices.add(vertex)
        self._touch()
        if vertex.get_graph() is not self:
            vertex.set_graph(self)

    def remove_vertex(self, vertex: Vertex) -> None:
        """Remove ``vertex`` and every edge attached to it.

        Raises
        ------
        KeyError
            If ``vertex`` is not part of this graph.

        """
        if not self._vertices.contains(vertex):
            raise KeyError(f"vertex {vertex.get_id()} not found")
        vertex.destroy()

    def get_vertices(self) -> VertexCollection:
        return VertexCollection(self._vertices)

    def get_vertex(self, vertex_id: int) -> Vertex:
        """Look a vertex up by id; raises ``KeyError`` when absent."""
        return self._vertices[vertex_id]

    def get_edges(self) -> EdgeCollection:
        edges = EdgeCollection()
        for vertex in self._vertices:
            for edge in vertex.get_edges():
                if not edges.contains_edge(edge):
                    edges.add(edge)
        return edges

    def new_from_edges(self, edges) -> Graph:
        """Create an independent copy of this graph holding only ``edges``.

        Every vertex touched by ``edges`` is cloned (fresh id, same attributes) and
        every edge is cloned and rewired onto the cloned vertices, so the result
        can be mutated without affecting this graph.

        Parameters
        ----------
        edges : Iterable[Edge]
            Edges to copy; duplicates are copied once.

        Returns
        -------
        Graph

        """
        edges = EdgeCollection(edges)
        new_graph = type(self)(**self.get_attributes())
        vertex_map = VertexReplacementMap()

        for vertex in edges.get_vertices():
            new_vertex = vertex.clone()
            new_vertex.set_graph(new_graph)
            vertex_map[vertex] = new_vertex

        for edge in edges:
            edge.clone().replace_vertices_from_map(vertex_map)

        logger.debug(
            "copied %d vertices and %d edges into a new graph", len(vertex_map), len(edges)
        )
        return new_graph

    # Degree

    def get_degree(self) -> int:
        """Degree of a k-regular graph.

        Raises
        ------
        EmptyGraphError
            If the graph is empty.
        ValueError
            If vertex degrees differ.

        """
        if not self._vertices:
            raise EmptyGraphError("Graph is empty")
        vertices = iter(self._vertices)
        degree = next(vertices).degree()
        for vertex in vertices:
            if vertex.degree() != degree:
                raise ValueError("Graph is not k-regular (vertex degrees differ)")
        return degree

    def get_degree_min(self) -> int:
        if not self._vertices:
            raise EmptyGraphError("Graph is empty")
        return min(vertex.degree() for vertex in self._vertices)

    def get_degree_max(self) -> int:
        if not self._vertices:
            raise EmptyGraphError("Graph is empty")
        return max(vertex.degree() for vertex in self._vertices)

    def is_regular(self) -> bool:
        """True if every vertex has the same degree (an empty graph is regular)."""
        degrees = {vertex.degree() for vertex in self._vertices}
        return len(degrees) <= 1

    def is_balanced(self) -> bool:
        """True if every vertex's in-degree equals its out-degree."""
        return all(vertex.degree_in() == vertex.degree_out() for vertex in self._vertices)

    def is_complete(self) -> bool:
        for vertex_a in self._vertices:
            connected = vertex_a.get_vertices()
            for vertex_b in self._vertices:
                if vertex_a is not vertex_b and not connected.contains(vertex_b):
                    return False
        return True

    # Direction

    def has_directed(self) -> bool:
        return any(edge.is_directed() for edge in self.get_edges())

    def has_undirected(self) -> bool:
        return any(not edge.is_directed() for edge in self.get_edges())

    def is_mixed(self) -> bool:
        return self.has_directed() and self.has_undirected()

    # Groups

    def get_groups(self) -> list:
        """Distinct ``group`` attribute values, in first-seen order.

        A missing group counts as 0; groups must be integers, anything else
        raises ``TypeError``.
        """
        groups = {}
        for vertex in self._vertices:
            groups[_group_of(vertex)] = True
        return list(groups)

    def get_number_of_groups(self) -> int:
        return len(self.get_groups())

    def get_vertices_group(self, group: int) -> VertexCollection:
        return self._vertices.filter(lambda vertex: _group_of(vertex) == group)

    def is_bipartit(self) -> bool:
        """True if the vertex groups form a valid bipartition."""
        if self.get_number_of_groups() != 2:
            return False
        for vertex in self._vertices:
            group = _group_of(vertex)
            for neighbor in vertex.get_vertices_to():
                if _group_of(neighbor) == group:
                    return False
        return True

    # Views

    def vertices_df(self) -> pl.DataFrame:
        """Vertex attribute table.

        Returns
        -------
        polars.DataFrame
            One row per vertex: ``vertex_id`` followed by one column per attribute
            key (null where a vertex lacks it).

        """
        rows = []
        for vertex in self._vertices:
            attrs = {k: v for k, v in vertex.get_attributes().items() if k not in self._VERTEX_RESERVED}
            rows.append({"vertex_id": vertex.get_id(), **attrs})
        if not rows:
            return pl.DataFrame(schema={"vertex_id": pl.Int64})
        return pl.DataFrame(rows, infer_schema_length=None)

    def edges_df(self) -> pl.DataFrame:
        """Edge table with ``edge_id``, ``source``, ``target``, ``directed`` and attribute columns."""
        rows = []
        for edge in self.get_edges():
            attrs = {k: v for k, v in edge.get_attributes().items() if k not in self._EDGE_RESERVED}
            rows.append(
                {
                    "edge_id": edge.get_id(),
                    "source": edge.get_from().get_id(),
                    "target": edge.get_to().get_id(),
                    "directed": edge.is_directed(),
                    **attrs,
                }
            )
        if not rows:
            return pl.DataFrame(
                schema={
                    "edge_id": pl.Int64,
                    "source": pl.Int64,
                    "target": pl.Int64,
                    "directed": pl.Boolean,
                }
            )
        return pl.DataFrame(rows, infer_schema_length=None)

    def adjacency_matrix(self, weight: str | None = None, default: float = 1.0) -> sp.csr_matrix:
        """Sparse adjacency matrix in vertex insertion order.

        Parameters
        ----------
        weight : str, optional
            Edge attribute holding the entry value. If None, every edge counts 1.
        default : float
            Value used when an edge lacks ``weight``.

        Returns
        -------
        scipy.sparse.csr_matrix
            ``A[i, j]`` sums the edges leading from vertex ``i`` to vertex ``j``;
            undirected edges fill both ``A[i, j]`` and ``A[j, i]``, loops fill the
            diagonal once.

        """
        index = {vid: i for i, vid in enumerate(self._vertices.keys())}
        n = len(index)
        rows, cols, data = [], [], []
        for edge in self.get_edges():
            value = 1.0 if weight is None else float(edge.get_attribute(weight, default))
            i = index[edge.get_from().get_id()]
            j = index[edge.get_to().get_id()]
            rows.append(i)
            cols.append(j)
            data.append(value)
            if not edge.is_directed() and not edge.is_loop():
                rows.append(j)
                cols.append(i)
                data.append(value)
        return sp.csr_matrix(
            (
                np.asarray(data, dtype=np.float64),
                (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64)),
            ),
            shape=(n, n),
        )
