# mathgraph/__init__.py
"""mathgraph: single import, full API."""
from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    # namespaces
    "adapters": "mathgraph.adapters",
    "core": "mathgraph.core",
    "algorithms": "mathgraph.algorithms",
    "exceptions": "mathgraph.exceptions",
    # algorithm modules (direct convenience)
    "search": "mathgraph.algorithms.search",
    "shortest_path": "mathgraph.algorithms.shortest_path",
    "minimum_spanning_tree": "mathgraph.algorithms.minimum_spanning_tree",
    "traveling_salesman": "mathgraph.algorithms.traveling_salesman",
    "networkx": "mathgraph.adapters.networkx",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Core
    "Graph": ("mathgraph.core.graph", "Graph"),
    "Vertex": ("mathgraph.core.graph", "Vertex"),
    "Edge": ("mathgraph.core.graph", "Edge"),
    "EdgeType": ("mathgraph.core.structure", "EdgeType"),
    "Walk": ("mathgraph.core.walk", "Walk"),
    "VertexCollection": ("mathgraph.core.collection", "VertexCollection"),
    "EdgeCollection": ("mathgraph.core.collection", "EdgeCollection"),
    "VertexReplacementMap": ("mathgraph.core.collection", "VertexReplacementMap"),

    # Algorithms
    "Dijkstra": ("mathgraph.algorithms.shortest_path", "Dijkstra"),
    "MooreBellmanFord": ("mathgraph.algorithms.shortest_path", "MooreBellmanFord"),
    "Kruskal": ("mathgraph.algorithms.minimum_spanning_tree", "Kruskal"),
    "Prim": ("mathgraph.algorithms.minimum_spanning_tree", "Prim"),
    "NearestNeighbor": ("mathgraph.algorithms.traveling_salesman", "NearestNeighbor"),

    # Errors
    "MathGraphError": ("mathgraph.exceptions", "MathGraphError"),
    "CrossGraphError": ("mathgraph.exceptions", "CrossGraphError"),
    "DisconnectedGraphError": ("mathgraph.exceptions", "DisconnectedGraphError"),
    "EmptyGraphError": ("mathgraph.exceptions", "EmptyGraphError"),
    "NegativeCycleError": ("mathgraph.exceptions", "NegativeCycleError"),
    "NoNegativeCycleError": ("mathgraph.exceptions", "NoNegativeCycleError"),
    "UnreachableVertexError": ("mathgraph.exceptions", "UnreachableVertexError"),

    # NetworkX adapter (optional dependency)
    "to_nx": ("mathgraph.adapters.networkx", "to_nx"),
    "from_nx": ("mathgraph.adapters.networkx", "from_nx"),
}

__all__ = sorted(set(list(_lazy_submodules) + list(_lazy_symbols)))


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


try:
    __version__ = _pkg_version("mathgraph")
except PackageNotFoundError:
    __version__ = "0.0.0"
