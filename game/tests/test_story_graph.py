# test_story_graph.py
import unittest

from engine.hit_regions import Navigate, Quit, Restart
from engine.narrative.graph import StoryGraph
from engine.narrative.session import StorySession
from engine.narrative.types import NodeState


class TestStoryGraph(unittest.TestCase):
    def test_first_node_is_start_unless_set(self):
        g = StoryGraph()
        a = g.add_node("a")
        b = g.add_node("b")
        self.assertEqual(g.start, a)
        g.set_start(b)
        self.assertEqual(g.start, b)

    def test_empty_graph_has_no_start(self):
        with self.assertRaises(LookupError):
            StoryGraph().start

    def test_choices_keep_insertion_order(self):
        g = StoryGraph()
        root, x, y, z = (g.add_node(t) for t in ("root", "x", "y", "z"))
        g.add_choice(root, "Ask", "first", x)
        g.add_choice(root, "Ask", "second", y)
        g.add_choice(root, "Ask", "third", z)
        node = g.node(root)
        self.assertEqual([c.description for c in node.choices], ["first", "second", "third"])
        self.assertEqual(node.choices[0].caption, "Ask: first")
        self.assertEqual(g.follow(root, 2), z)

    def test_terminal_iff_no_choices(self):
        g = StoryGraph()
        a = g.add_node("a")
        b = g.add_node("b")
        g.add_choice(a, "Go", "on", b)
        self.assertIs(g.state(a), NodeState.BRANCHING)
        self.assertIs(g.state(b), NodeState.TERMINAL)
        self.assertEqual(g.endings(), [b])
        for n in g:
            self.assertEqual(n.state is NodeState.TERMINAL, not n.choices)

    def test_cycles_self_loops_and_diamonds(self):
        g = StoryGraph()
        start = g.add_node("docks")
        look = g.add_node("look")
        turn = g.add_node("turn")
        boat = g.add_node("boat")
        g.add_choice(start, "Look around", "find a guide", look)
        g.add_choice(look, "No", "Turn away", turn)
        g.add_choice(look, "Yes", "Board", boat)
        g.add_choice(turn, "Look back", "He is still watching", start)   # cycle
        g.add_choice(turn, "Wait", "Stay put", turn)                    # self-loop
        g.add_choice(start, "Board", "Straight to the boat", boat)      # diamond into boat

        s = StorySession(g)
        s.choose(0)
        s.choose(0)
        self.assertEqual(s.current, turn)
        s.choose(1)
        self.assertEqual(s.current, turn)
        s.choose(0)
        self.assertEqual(s.current, start)
        s.choose(1)
        self.assertEqual(s.current, boat)

    def test_unknown_ids_rejected_at_build_time(self):
        g = StoryGraph()
        a = g.add_node("a")
        with self.assertRaises(KeyError):
            g.add_choice(a, "Go", "nowhere", 7)
        with self.assertRaises(KeyError):
            g.add_choice(3, "Go", "from nowhere", a)

    def test_frozen_graph_rejects_edits(self):
        g = StoryGraph()
        a = g.add_node("a")
        StorySession(g)
        with self.assertRaises(RuntimeError):
            g.add_node("late")
        with self.assertRaises(RuntimeError):
            g.add_choice(a, "Go", "again", a)


class TestStorySession(unittest.TestCase):
    def setUp(self):
        self.moon, self.trees = object(), object()
        g = StoryGraph()
        self.start = g.add_node("docks", image=self.moon)
        self.look = g.add_node("look")
        self.river = g.add_node("river", image=self.trees)
        g.add_choice(self.start, "Look around", "find a guide", self.look)
        g.add_choice(self.look, "Yes", "Board", self.river)
        self.session = StorySession(g)

    def test_starts_on_start_with_its_image(self):
        self.assertEqual(self.session.current, self.start)
        self.assertIs(self.session.displayed_image, self.moon)

    def test_navigation_replaces_or_clears_image(self):
        s = self.session
        s.apply(Navigate(0))
        self.assertEqual(s.current, self.look)
        self.assertIsNone(s.displayed_image)
        s.apply(Navigate(0))
        self.assertIs(s.displayed_image, self.trees)
        self.assertIs(s.state, NodeState.TERMINAL)

    def test_restart(self):
        s = self.session
        s.apply(Navigate(0))
        s.apply(Navigate(0))
        s.apply(Restart())
        self.assertEqual(s.current, self.start)
        self.assertIs(s.displayed_image, self.moon)

    def test_quit_is_not_a_session_action(self):
        with self.assertRaises(ValueError):
            self.session.apply(Quit())


if __name__ == "__main__":
    unittest.main()
