import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from mathgraph.core.collection import EdgeCollection, VertexCollection, VertexReplacementMap
from mathgraph.core.graph import Graph


class TestEdgeCollection(unittest.TestCase):

    def setUp(self):
        self.G = Graph()
        self.a = self.G.new_vertex({"name": "a"})
        self.b = self.G.new_vertex({"name": "b"})
        self.c = self.G.new_vertex({"name": "c"})

    def test_sum_attribute(self):
        e1 = self.a.create_edge_to(self.b, {"weight": 3})
        e2 = self.b.create_edge_to(self.c, {"weight": 2.3})
        edges = EdgeCollection([e1, e2])
        self.assertAlmostEqual(edges.sum_attribute("weight", 0), 5.3)

    def test_sum_attribute_empty_and_missing(self):
        self.assertEqual(EdgeCollection().sum_attribute("weight", 0), 0)
        e1 = self.a.create_edge_to(self.b)
        e2 = self.b.create_edge_to(self.c, {"weight": 4})
        self.assertEqual(EdgeCollection([e1, e2]).sum_attribute("weight", 1), 5)

    def test_rejects_vertex(self):
        with self.assertRaises(TypeError):
            EdgeCollection([self.a])
        with self.assertRaises(TypeError):
            VertexCollection().add("a")

    def test_ordered_keeps_duplicates(self):
        e1 = self.a.create_edge(self.b)
        e2 = self.b.create_edge(self.c)
        edges = EdgeCollection([e1, e2, e2, e1])
        self.assertEqual(len(edges), 2)
        self.assertEqual(edges.ordered(), [e1, e2, e2, e1])
        edges.remove(e2)
        self.assertEqual(edges.ordered(), [e1, e1])
        self.assertFalse(edges.contains_edge(e2))

    def test_get_vertices(self):
        e1 = self.a.create_edge_to(self.b)
        vertices = EdgeCollection([e1]).get_vertices()
        self.assertEqual(set(vertices.keys()), {self.a.get_id(), self.b.get_id()})


class TestVertexCollection(unittest.TestCase):

    def setUp(self):
        self.G = Graph()
        self.vs = [self.G.new_vertex({"name": n, "group": i % 2}) for i, n in enumerate("dacb")]

    def test_insertion_order_and_lookup(self):
        vc = VertexCollection(self.vs)
        self.assertEqual(vc.all(), self.vs)
        self.assertIs(vc[self.vs[2].get_id()], self.vs[2])
        self.assertTrue(vc.contains_vertex(self.vs[0]))
        self.assertIn(self.vs[1], vc)

    def test_adding_twice_is_idempotent(self):
        vc = VertexCollection(self.vs)
        vc.add(self.vs[0])
        self.assertEqual(len(vc), 4)

    def test_transforms_return_new_collections(self):
        vc = VertexCollection(self.vs)
        names = [v.get_attribute("name") for v in vc.sort_by(lambda v: v.get_attribute("name"))]
        self.assertEqual(names, ["a", "b", "c", "d"])
        names = [v.get_attribute("name") for v in vc.sort_by_desc(lambda v: v.get_attribute("name"))]
        self.assertEqual(names, ["d", "c", "b", "a"])
        self.assertEqual(vc.reverse().all(), list(reversed(self.vs)))
        self.assertEqual(len(vc.filter(lambda v: v.get_attribute("group") == 1)), 2)
        self.assertEqual(len(vc), 4)

    def test_first(self):
        vc = VertexCollection(self.vs)
        self.assertIs(vc.first(), self.vs[0])
        self.assertIs(vc.first(lambda v: v.get_attribute("name") == "c"), self.vs[2])
        self.assertIsNone(vc.first(lambda v: v.get_attribute("name") == "z"))
        self.assertIsNone(VertexCollection().first())

    def test_merge(self):
        left = VertexCollection(self.vs[:2])
        merged = left.merge(self.vs[1:])
        self.assertEqual(len(merged), 4)
        self.assertEqual(len(left), 2)

    def test_missing_key(self):
        with self.assertRaises(KeyError):
            VertexCollection()[12345]


class TestVertexReplacementMap(unittest.TestCase):

    def test_identity_keyed(self):
        G = Graph()
        a = G.new_vertex()
        b = G.new_vertex()
        replacements = VertexReplacementMap()
        replacements[a] = b
        self.assertIn(a, replacements)
        self.assertIs(replacements[a], b)
        self.assertIs(replacements.get(b, a), a)
        del replacements[a]
        self.assertEqual(len(replacements), 0)

    def test_non_vertex_key(self):
        with self.assertRaises(TypeError):
            VertexReplacementMap()["a"] = None


if __name__ == "__main__":
    unittest.main()
