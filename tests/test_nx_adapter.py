import unittest

import networkx as nx

from mathgraph.adapters.networkx import from_nx, to_nx
from mathgraph.algorithms.shortest_path import Dijkstra
from mathgraph.core.graph import Graph


class TestNetworkXAdapter(unittest.TestCase):

    def setUp(self):
        G = Graph(name="demo")
        self.a = G.new_vertex({"name": "A", "group": 1})
        self.b = G.new_vertex({"name": "B"})
        self.c = G.new_vertex({"name": "C"})
        self.ab = self.a.create_edge(self.b, {"weight": 2.0})
        self.bc = self.b.create_edge(self.c, {"weight": 3.0})
        self.G = G

    def test_undirected_export(self):
        nxG = to_nx(self.G)
        self.assertIsInstance(nxG, nx.MultiGraph)
        self.assertFalse(nxG.is_directed())
        self.assertEqual(nxG.number_of_nodes(), 3)
        self.assertEqual(nxG.number_of_edges(), 2)
        self.assertEqual(nxG.nodes[self.a.get_id()]["group"], 1)
        data = nxG.get_edge_data(self.a.get_id(), self.b.get_id(), key=self.ab.get_id())
        self.assertEqual(data["weight"], 2.0)

    def test_mixed_export(self):
        ac = self.a.create_edge_to(self.c, {"weight": 9.0})
        nxG = to_nx(self.G)
        self.assertIsInstance(nxG, nx.MultiDiGraph)
        # undirected edges go both ways
        self.assertEqual(nxG.number_of_edges(), 5)
        self.assertTrue(nxG.has_edge(self.b.get_id(), self.a.get_id(), key=self.ab.get_id()))
        self.assertFalse(nxG.has_edge(self.c.get_id(), self.a.get_id(), key=ac.get_id()))

    def test_import_undirected(self):
        nxG = nx.path_graph(4)
        nxG.nodes[2]["name"] = "two"
        nxG.add_edge(0, 1, weight=3)
        G = from_nx(nxG)
        self.assertEqual(len(G.get_vertices()), 4)
        self.assertEqual(len(G.get_edges()), 3)
        self.assertFalse(G.has_directed())
        names = sorted(str(v.get_attribute("name")) for v in G.get_vertices())
        self.assertEqual(names, ["0", "1", "3", "two"])

    def test_import_directed_multigraph(self):
        nxG = nx.MultiDiGraph()
        nxG.add_edge("x", "y", weight=4, tags=["dropped"])
        nxG.add_edge("x", "y", weight=1)
        nxG.add_edge("y", "z", weight=2)
        G = from_nx(nxG)
        self.assertTrue(G.has_directed())
        self.assertFalse(G.has_undirected())
        self.assertEqual(len(G.get_edges()), 3)

        vertices = {v.get_attribute("name"): v for v in G.get_vertices()}
        self.assertEqual(Dijkstra(vertices["x"]).get_distance(vertices["z"]), 3)
        for edge in G.get_edges():
            self.assertIsNone(edge.get_attribute("tags"))

    def test_round_trip_keeps_structure(self):
        G2 = from_nx(to_nx(self.G))
        self.assertEqual(len(G2.get_vertices()), 3)
        self.assertEqual(len(G2.get_edges()), 2)
        self.assertEqual(G2.get_edges().sum_attribute("weight"), 5.0)
        self.assertEqual(G2.get_attribute("name"), "demo")


if __name__ == "__main__":
    unittest.main()
