import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from mathgraph.algorithms.search import BreadthFirst, DepthFirst
from mathgraph.core.graph import Graph


def path_graph(n, directed=False):
    G = Graph()
    vertices = [G.new_vertex({"name": f"v{i}"}) for i in range(n)]
    for u, v in zip(vertices, vertices[1:]):
        if directed:
            u.create_edge_to(v)
        else:
            u.create_edge(v)
    return G, vertices


class TestSearch(unittest.TestCase):

    def test_path_graph(self):
        G, vertices = path_graph(50)
        for algo in (BreadthFirst, DepthFirst):
            visited = algo(vertices[0]).get_vertices()
            self.assertEqual(len(visited), 50)
            self.assertEqual(visited.all(), vertices)

    def test_directed_edges_followed_forward_only(self):
        G, vertices = path_graph(5, directed=True)
        self.assertEqual(len(BreadthFirst(vertices[2]).get_vertices()), 3)
        self.assertEqual(len(DepthFirst(vertices[2]).get_vertices()), 3)
        self.assertEqual(BreadthFirst(vertices[4]).get_vertices().all(), [vertices[4]])

    def test_breadth_first_order(self):
        G = Graph()
        root, a, b, c = (G.new_vertex({"name": n}) for n in ("root", "a", "b", "c"))
        root.create_edge_to(a)
        root.create_edge_to(b)
        a.create_edge_to(c)
        names = [v.get_attribute("name") for v in BreadthFirst(root).get_vertices()]
        self.assertEqual(names, ["root", "a", "b", "c"])

    def test_cycle_visits_each_vertex_once(self):
        G = Graph()
        a, b, c = G.new_vertex(), G.new_vertex(), G.new_vertex()
        a.create_edge_to(b)
        b.create_edge_to(c)
        c.create_edge_to(a)
        a.create_edge(a)
        for algo in (BreadthFirst, DepthFirst):
            self.assertEqual(len(algo(b).get_vertices()), 3)

    def test_isolated_start(self):
        G = Graph()
        v = G.new_vertex()
        G.new_vertex()
        self.assertEqual(DepthFirst(v).get_vertices().all(), [v])


if __name__ == "__main__":
    unittest.main()
