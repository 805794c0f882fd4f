from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .graph import Edge, Vertex


def _vertex_type():
    from .graph import Vertex

    return Vertex


def _edge_type():
    from .graph import Edge

    return Edge


class Collection:
    """Insertion-ordered collection of graph entities keyed by their stable id.

    Adding a member whose id is already present overwrites it, so insertion is
    idempotent by identity. All transforms (``filter``, ``sort_by``, ``reverse``,
    ``merge``) return new collections; only ``add`` and ``remove`` mutate.

    Parameters
    ----------
    items : Iterable, optional
        Initial members.

    """

    def __init__(self, items: Iterable = ()):
        self._items = {}
        for item in items:
            self.add(item)

    # Construction helpers

    def _new(self, items: Iterable):
        return type(self)(items)

    def _accepts(self, value) -> bool:
        return hasattr(value, "get_id")

    # Membership

    def add(self, value) -> None:
        if not self._accepts(value):
            raise TypeError(
                f"invalid {type(self).__name__} member: {type(value).__name__}"
            )
        self._items[value.get_id()] = value

    def contains(self, value) -> bool:
        if not self._accepts(value):
            return False
        stored = self._items.get(value.get_id())
        return stored is value

    def remove(self, value) -> None:
        self._items.pop(value.get_id(), None)

    # Transforms

    def filter(self, predicate: Callable[[Any], bool] | None = None):
        if predicate is None:
            return self._new(v for v in self._items.values() if v)
        return self._new(v for v in self._items.values() if predicate(v))

    def first(self, predicate: Callable[[Any], bool] | None = None, default=None):
        for value in self._items.values():
            if predicate is None or predicate(value):
                return value
        return default

    def merge(self, other: Iterable):
        merged = self._new(self._items.values())
        for value in other:
            merged.add(value)
        return merged

    def reverse(self):
        return self._new(reversed(list(self._items.values())))

    def sort_by(self, key: Callable[[Any], Any], descending: bool = False):
        """Return a new collection ordered by ``key`` (stable)."""
        return self._new(sorted(self._items.values(), key=key, reverse=descending))

    def sort_by_desc(self, key: Callable[[Any], Any]):
        return self.sort_by(key, descending=True)

    # Accessors

    def all(self) -> list:
        return list(self._items.values())

    def values(self) -> list:
        return list(self._items.values())

    def keys(self) -> list:
        return list(self._items.keys())

    def items(self) -> dict:
        return dict(self._items)

    def __getitem__(self, key):
        return self._items[key]

    def __contains__(self, value) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self):
        return f"{type(self).__name__}({self.keys()!r})"


class VertexCollection(Collection):
    """Collection of vertices keyed by vertex id for fast membership checks during traversal."""

    def _accepts(self, value) -> bool:
        return isinstance(value, _vertex_type())

    def contains_vertex(self, vertex: Vertex) -> bool:
        return self._items.get(vertex.get_id()) is vertex


class EdgeCollection(Collection):
    """Collection of edges.

    Besides the identity-keyed store, keeps the raw insertion order (duplicates
    included) so that a walk can replay edges it traversed more than once.

    """

    def __init__(self, items: Iterable = ()):
        self._order = []
        super().__init__(items)

    def _accepts(self, value) -> bool:
        return isinstance(value, _edge_type())

    def add(self, value) -> None:
        super().add(value)
        self._order.append(value.get_id())

    def remove(self, value) -> None:
        eid = value.get_id()
        if eid in self._items:
            del self._items[eid]
            self._order = [k for k in self._order if k != eid]

    def contains_edge(self, edge: Edge) -> bool:
        return self._items.get(edge.get_id()) is edge

    def ordered(self) -> list:
        """Edges in insertion order, repeated edges included."""
        return [self._items[eid] for eid in self._order]

    def get_vertices(self) -> VertexCollection:
        vertices = VertexCollection()
        for edge in self._items.values():
            for vertex in edge.get_vertices():
                vertices.add(vertex)
        return vertices

    def sum_attribute(self, name: str, default: float = 0.0) -> float:
        """Sum attribute ``name`` over all edges, using ``default`` where it is missing."""
        total = 0
        for edge in self._items.values():
            total += edge.get_attribute(name, default)
        return total


class VertexReplacementMap:
    """Old vertex -> new vertex mapping keyed by vertex identity.

    Used when copying a set of edges into a new graph: every cloned edge looks up
    its endpoints here to find the cloned vertices.

    """

    def __init__(self):
        self._replacements = {}

    def _check(self, vertex):
        if not isinstance(vertex, _vertex_type()):
            raise TypeError(f"key must be Vertex, got {type(vertex).__name__}")

    def __setitem__(self, vertex: Vertex, replacement: Vertex) -> None:
        self._check(vertex)
        self._replacements[vertex.get_id()] = replacement

    def __getitem__(self, vertex: Vertex) -> Vertex:
        self._check(vertex)
        return self._replacements[vertex.get_id()]

    def __delitem__(self, vertex: Vertex) -> None:
        self._check(vertex)
        del self._replacements[vertex.get_id()]

    def __contains__(self, vertex) -> bool:
        self._check(vertex)
        return vertex.get_id() in self._replacements

    def get(self, vertex: Vertex, default=None):
        self._check(vertex)
        return self._replacements.get(vertex.get_id(), default)

    def __len__(self) -> int:
        return len(self._replacements)
