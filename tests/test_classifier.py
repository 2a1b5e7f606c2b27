"""
Test cases for the priority-ordered gesture decision table.
"""
import itertools
import unittest

from handcontrol.classifier import GestureClassifier
from handcontrol.config import Config
from handcontrol.geometry import GeometryEngine, to_frame
from handcontrol.models import FeatureSet, GestureLabel

from tests.hands import make_hand


def features(index=False, middle=False, ring=False, pinky=False, thumb_up=False, thumb_extended=False):
    return FeatureSet(
        palm_width=0.21,
        index=index,
        middle=middle,
        ring=ring,
        pinky=pinky,
        thumb_extended=thumb_extended,
        thumb_up=thumb_up,
    )


class TestClassifierOnHands(unittest.TestCase):
    """Full pipeline from synthetic landmarks to a label."""

    def setUp(self):
        self.cfg = Config()
        self.classifier = GestureClassifier(self.cfg)

    def classify(self, **pose):
        lm = to_frame(make_hand(**pose))
        return self.classifier.classify(GeometryEngine.extract_features(lm, self.cfg), lm)

    def test_vocabulary(self):
        cases = {
            GestureLabel.THUMBS_UP: dict(thumb_up=True),
            GestureLabel.MIDDLE: dict(middle=True),
            GestureLabel.ROCK: dict(index=True, pinky=True),
            GestureLabel.THREE: dict(index=True, middle=True, ring=True),
            GestureLabel.TWO: dict(index=True, middle=True),
            GestureLabel.POINT: dict(index=True),
            GestureLabel.PALM: dict(index=True, middle=True, ring=True, pinky=True),
            GestureLabel.FIST: dict(),
        }
        for expected, pose in cases.items():
            with self.subTest(expected=expected):
                self.assertEqual(self.classify(**pose), expected)

    def test_two_becomes_three_when_ring_extends(self):
        self.assertEqual(self.classify(index=True, middle=True), GestureLabel.TWO)
        self.assertEqual(self.classify(index=True, middle=True, ring=True), GestureLabel.THREE)

    def test_palm_ignores_thumb(self):
        self.assertEqual(
            self.classify(index=True, middle=True, ring=True, pinky=True, thumb_up=True),
            GestureLabel.PALM,
        )

    def test_ambiguous_poses_are_none(self):
        self.assertEqual(self.classify(middle=True, ring=True), GestureLabel.NONE)
        self.assertEqual(self.classify(ring=True), GestureLabel.NONE)
        self.assertEqual(self.classify(index=True, ring=True), GestureLabel.NONE)

    def test_every_pose_yields_one_label(self):
        for flags in itertools.product([False, True], repeat=5):
            pose = dict(zip(["index", "middle", "ring", "pinky", "thumb_up"], flags))
            with self.subTest(**pose):
                self.assertIsInstance(self.classify(**pose), GestureLabel)

    def test_middle_needs_other_tips_below_their_pips(self):
        lm = list(to_frame(make_hand(middle=True)))
        # Lift the ring tip above its PIP while keeping the finger short.
        lm[16] = lm[16]._replace(y=0.51)
        f = GeometryEngine.extract_features(lm, self.cfg)
        self.assertFalse(f.ring)
        self.assertEqual(self.classifier.classify(f, lm), GestureLabel.NONE)

    def test_middle_needs_clear_raise(self):
        lm = list(to_frame(make_hand()))
        f = features(middle=True)
        # Curled middle tip is below its MCP, so the raise check fails.
        self.assertEqual(self.classifier.classify(f, lm), GestureLabel.NONE)


class TestClassifierPriority(unittest.TestCase):
    """First match wins when feature sets satisfy more than one rule."""

    def setUp(self):
        self.classifier = GestureClassifier(Config())
        self.fist = to_frame(make_hand())
        self.middle_hand = to_frame(make_hand(middle=True))

    def test_thumbs_up_beats_fist(self):
        self.assertEqual(self.classifier.classify(features(thumb_up=True), self.fist), GestureLabel.THUMBS_UP)
        self.assertEqual(self.classifier.classify(features(), self.fist), GestureLabel.FIST)

    def test_middle_beats_later_rules(self):
        f = features(middle=True, thumb_up=True)
        self.assertEqual(self.classifier.classify(f, self.middle_hand), GestureLabel.MIDDLE)

    def test_palm_never_three(self):
        f = features(index=True, middle=True, ring=True, pinky=True)
        self.assertEqual(self.classifier.classify(f, self.fist), GestureLabel.PALM)

    def test_rock_three_two_point_are_exclusive(self):
        table = {
            (True, False, False, True): GestureLabel.ROCK,
            (True, True, True, False): GestureLabel.THREE,
            (True, True, False, False): GestureLabel.TWO,
            (True, False, False, False): GestureLabel.POINT,
        }
        for (i, m, r, p), expected in table.items():
            with self.subTest(expected=expected):
                f = features(index=i, middle=m, ring=r, pinky=p, thumb_up=True)
                self.assertEqual(self.classifier.classify(f, self.fist), expected)

    def test_thumb_extension_alone_does_not_matter(self):
        f = features(thumb_extended=True)
        self.assertEqual(self.classifier.classify(f, self.fist), GestureLabel.FIST)


if __name__ == "__main__":
    unittest.main()
