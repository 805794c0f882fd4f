# networkx is optional; import mathgraph.adapters.networkx explicitly
__all__ = ["networkx"]
