import unittest

from monkey.runtime.environment import Environment
from monkey.runtime.object import Integer


class EnvironmentTestCase(unittest.TestCase):

    def test_get_set(self):
        env = Environment()
        self.assertIsNone(env.get("x"))
        self.assertEqual(Integer(1), env.set("x", Integer(1)))
        self.assertEqual(Integer(1), env.get("x"))
        self.assertIn("x", env)
        self.assertNotIn("y", env)

    def test_rebind(self):
        env = Environment()
        env.set("x", Integer(1))
        env.set("x", Integer(2))
        self.assertEqual(Integer(2), env.get("x"))

    def test_lookup_walks_parents(self):
        root = Environment()
        root.set("a", Integer(1))
        middle = Environment.new_enclosed(root)
        middle.set("b", Integer(2))
        inner = Environment.new_enclosed(middle)

        self.assertIs(middle, inner.parent)
        self.assertEqual(Integer(1), inner.get("a"))
        self.assertEqual(Integer(2), inner.get("b"))
        self.assertIsNone(root.get("b"))

    def test_set_is_local(self):
        root = Environment()
        root.set("x", Integer(1))
        inner = Environment.new_enclosed(root)
        inner.set("x", Integer(2))
        inner.set("y", Integer(3))

        self.assertEqual(Integer(2), inner.get("x"))
        self.assertEqual(Integer(1), root.get("x"))
        self.assertNotIn("y", root)

    def test_parent_is_shared(self):
        root = Environment()
        first = Environment.new_enclosed(root)
        second = Environment.new_enclosed(root)

        root.set("late", Integer(7))
        self.assertEqual(Integer(7), first.get("late"))
        self.assertEqual(Integer(7), second.get("late"))

    def test_repr(self):
        root = Environment()
        root.set("a", Integer(1))
        root.set("b", Integer(2))
        inner = Environment.new_enclosed(root)
        inner.set("c", Integer(3))

        self.assertEqual("[a, b]", repr(root))
        self.assertEqual("[c] < [a, b]", repr(inner))


if __name__ == '__main__':
    unittest.main()
