import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from mathgraph.algorithms.traveling_salesman import NearestNeighbor
from mathgraph.core.graph import Graph
from mathgraph.exceptions import DisconnectedGraphError, EmptyGraphError


class TestNearestNeighbor(unittest.TestCase):

    def test_two_vertices_parallel_edges(self):
        G = Graph()
        a, b = G.new_vertex(), G.new_vertex()
        for weight in (4, 3, 5):
            a.create_edge(b, {"weight": weight})
        for seed in (0, 1):
            edges = NearestNeighbor(G, seed=seed).get_edges()
            self.assertEqual(len(edges), 2)
            self.assertEqual(edges.sum_attribute("weight"), 7)

    def test_square(self):
        G = Graph()
        a, b, c, d = (G.new_vertex({"name": n}) for n in "abcd")
        a.create_edge(b, {"weight": 1})
        b.create_edge(c, {"weight": 2})
        c.create_edge(d, {"weight": 3})
        d.create_edge(a, {"weight": 4})
        a.create_edge(c, {"weight": 5})
        b.create_edge(d, {"weight": 6})

        tsp = NearestNeighbor(G)
        tsp.set_start_vertex(a)
        self.assertIs(tsp.get_start_vertex(), a)
        edges = tsp.get_edges()
        self.assertEqual(len(edges), 4)
        self.assertEqual(edges.sum_attribute("weight"), 10)
        for vertex in (a, b, c, d):
            self.assertEqual(sum(1 for e in edges if e.get_vertices().contains(vertex)), 2)

        tour = tsp.create_graph()
        self.assertEqual(len(tour.get_vertices()), 4)
        self.assertEqual(tour.get_degree(), 2)

    def test_empty(self):
        with self.assertRaises(EmptyGraphError):
            NearestNeighbor(Graph())

    def test_disconnected(self):
        G = Graph()
        G.new_vertex()
        G.new_vertex()
        with self.assertRaises(DisconnectedGraphError):
            NearestNeighbor(G).get_edges()

    def test_tour_cannot_be_closed(self):
        G = Graph()
        a, b, c = G.new_vertex(), G.new_vertex(), G.new_vertex()
        a.create_edge(b, {"weight": 1})
        b.create_edge(c, {"weight": 1})
        tsp = NearestNeighbor(G)
        tsp.set_start_vertex(a)
        with self.assertRaises(DisconnectedGraphError):
            tsp.get_edges()


if __name__ == "__main__":
    unittest.main()
