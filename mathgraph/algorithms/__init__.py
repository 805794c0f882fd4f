from . import minimum_spanning_tree, search, shortest_path, traveling_salesman
from .minimum_spanning_tree import Kruskal, MinimumSpanningTree, Prim
from .shortest_path import Dijkstra, MooreBellmanFord, ShortestPath
from .traveling_salesman import NearestNeighbor

# BreadthFirst exists both as a search and as a shortest path; use the module path
__all__ = [
    "search",
    "shortest_path",
    "minimum_spanning_tree",
    "traveling_salesman",
    "ShortestPath",
    "Dijkstra",
    "MooreBellmanFord",
    "MinimumSpanningTree",
    "Kruskal",
    "Prim",
    "NearestNeighbor",
]
