# test_loader.py
import os
import tempfile
import unittest

from engine.narrative.loader import StoryFormatError, build_story, default_story_path, load_story_file
from engine.narrative.session import StorySession
from engine.narrative.types import NodeState
from engine.resources import AssetError, load_image
from engine.ui.story_layout import fit_image

STORY = default_story_path("game/content/crossing.yaml")


class TestCrossingStory(unittest.TestCase):
    def setUp(self):
        self.loaded = []

        def fake_loader(relpath):
            self.loaded.append(relpath)
            return ("image", relpath)

        self.graph, self.ids = load_story_file(STORY, image_loader=fake_loader)

    def test_shape(self):
        self.assertEqual(len(self.graph), 32)
        self.assertEqual(self.graph.start, self.ids["start"])
        self.assertEqual(self.graph.endings(), [self.ids["end"]])
        self.assertCountEqual(self.loaded, ["images/dark_moon.png", "images/trees.png", "images/red_moon.png"])

    def test_start_node(self):
        start = self.graph.node(self.graph.start)
        self.assertTrue(start.text.startswith("When you next open your eyes"))
        self.assertNotIn("\n", start.text)
        self.assertEqual(start.image, ("image", "images/dark_moon.png"))
        self.assertEqual([c.caption for c in start.choices], ["Look around: You try to find another guide"])

    def test_turn_loops_back_to_start(self):
        turn = self.graph.node(self.ids["turn"])
        self.assertEqual(turn.choices[0].target, self.ids["start"])

    def test_shared_targets(self):
        silence = self.ids["silence_2"]
        for key in ("no_soul", "depths", "bottomless"):
            self.assertEqual(self.graph.follow(self.ids[key], 0), silence)

    def test_quoted_labels(self):
        look = self.graph.node(self.ids["look"])
        self.assertEqual([c.label for c in look.choices], ["Yes", "No"])
        time = self.graph.node(self.ids["time"])
        self.assertEqual(time.choices[0].description, "\"80 years? Don't you ever get bored?\"")

    def test_descriptions_with_colons_stay_strings(self):
        grace = self.graph.node(self.ids["grace"])
        self.assertEqual(grace.choices[1].description, "How did you get this job?")
        what = self.graph.node(self.ids["what"])
        self.assertEqual(what.choices[0].description, "Hey?")
        for node in self.graph:
            for ch in node.choices:
                self.assertIsInstance(ch.description, str)

    def test_every_node_reaches_the_end(self):
        end = self.ids["end"]
        for nid in range(len(self.graph)):
            seen, todo = set(), [nid]
            while todo:
                cur = todo.pop()
                if cur in seen:
                    continue
                seen.add(cur)
                todo.extend(c.target for c in self.graph.node(cur).choices)
            self.assertIn(end, seen, nid)

    def test_playthrough_first_choices(self):
        s = StorySession(self.graph)
        steps = 0
        while s.state is NodeState.BRANCHING and steps < 100:
            s.choose(0)
            steps += 1
        self.assertEqual(s.current, self.ids["end"])


class TestBuildStoryErrors(unittest.TestCase):
    def test_unknown_goto(self):
        with self.assertRaises(StoryFormatError):
            build_story({"nodes": {"a": {"text": "x", "choices": [{"label": "Go", "description": "on", "goto": "b"}]}}})

    def test_missing_nodes(self):
        with self.assertRaises(StoryFormatError):
            build_story({"title": "empty"})

    def test_bad_start(self):
        with self.assertRaises(StoryFormatError):
            build_story({"start": "nope", "nodes": {"a": {"text": "x"}}})

    def test_node_must_be_mapping(self):
        with self.assertRaises(StoryFormatError):
            build_story({"nodes": {"a": "just text"}})

    def test_image_needs_loader(self):
        with self.assertRaises(StoryFormatError):
            build_story({"nodes": {"a": {"text": "x", "image": "images/trees.png"}}})

    def test_text_list_and_explicit_start(self):
        graph, ids = build_story({
            "start": "b",
            "nodes": {
                "a": {"text": ["one", "two"]},
                "b": {"text": "b", "choices": [{"label": "Go", "description": "back", "goto": "a"}]},
            },
        })
        self.assertEqual(graph.node(ids["a"]).text, "one\ntwo")
        self.assertEqual(graph.start, ids["b"])

    def test_load_from_file(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "tiny.yaml")
            with open(path, "w", encoding="utf-8") as f:
                f.write("nodes:\n  only:\n    text: Nothing happens.\n")
            graph, ids = load_story_file(path)
        self.assertIs(graph.state(ids["only"]), NodeState.TERMINAL)


class TestImageProvider(unittest.TestCase):
    def test_illustrations_fill_the_band(self):
        for relpath in ("images/dark_moon.png", "images/trees.png", "images/red_moon.png"):
            surf = load_image(relpath)
            self.assertEqual(surf.get_size(), (320, 160), relpath)
            place = fit_image(surf, 640, 40, 240)
            self.assertEqual((place.x, place.w, place.h), (80, 480, 240), relpath)
            # Not a flat fill
            self.assertNotEqual(surf.get_at((0, 0)), surf.get_at((160, 150)), relpath)

    def test_missing_image_is_fatal(self):
        with self.assertRaises(AssetError):
            load_image("images/does_not_exist.png")


if __name__ == "__main__":
    unittest.main()
