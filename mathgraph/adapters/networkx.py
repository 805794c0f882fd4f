try:
    import networkx as nx
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "Optional dependency 'networkx' is not installed. "
        "Install with: pip install mathgraph[networkx]"
    ) from e

from ..core.attributes import _coerce_value
from ..core.graph import Graph


def _public_attrs(attrs: dict) -> dict:
    """Keep only attribute values a mathgraph attribute store accepts; others are dropped."""
    out = {}
    for k, v in attrs.items():
        try:
            out[str(k)] = _coerce_value(k, v)
        except TypeError:
            continue
    return out


def to_nx(graph: Graph):
    """
    Export Graph to a NetworkX multigraph.

    Parameters
    ----------
    graph : Graph
        Source graph instance.

    Returns
    -------
    networkx.MultiGraph | networkx.MultiDiGraph
        ``MultiDiGraph`` if any edge is directed, else ``MultiGraph``.
        Nodes are vertex ids carrying the vertex attributes; edge keys are edge
        ids carrying the edge attributes. Graph attributes land in ``G.graph``.
        In a directed export undirected edges are emitted in both directions
        under the same key.
    """
    directed = graph.has_directed()
    G = nx.MultiDiGraph() if directed else nx.MultiGraph()
    G.graph.update(graph.get_attributes())

    for v in graph.get_vertices():
        G.add_node(v.get_id(), **v.get_attributes())

    for e in graph.get_edges():
        u = e.get_from().get_id()
        w = e.get_to().get_id()
        attrs = e.get_attributes()
        G.add_edge(u, w, key=e.get_id(), **attrs)
        if directed and not e.is_directed() and not e.is_loop():
            G.add_edge(w, u, key=e.get_id(), **attrs)

    return G


def from_nx(nxG) -> Graph:
    """
    Import a NetworkX graph into a new Graph.

    Parameters
    ----------
    nxG : networkx.Graph
        Any NetworkX graph class; multigraph edges are all imported.

    Returns
    -------
    Graph
        Node keys are kept in the ``name`` attribute unless the node already
        has one. Edges are directed iff ``nxG`` is directed. Attribute values
        that are not scalars are skipped.
    """
    graph = Graph(**_public_attrs(nxG.graph))
    vertices = {}

    for node, data in nxG.nodes(data=True):
        attrs = _public_attrs(data)
        if "name" not in attrs:
            try:
                attrs["name"] = _coerce_value("name", node)
            except TypeError:
                attrs["name"] = str(node)
        vertices[node] = graph.new_vertex(attrs)

    directed = nxG.is_directed()
    for u, w, data in nxG.edges(data=True):
        source, target = vertices[u], vertices[w]
        if directed:
            source.create_edge_to(target, _public_attrs(data))
        else:
            source.create_edge(target, _public_attrs(data))

    return graph
