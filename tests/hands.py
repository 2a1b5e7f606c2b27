"""
Synthetic upright hands for tests.

The wrist sits at the bottom, knuckles in a row at y=0.6 and fingers point
up the image. An extended finger is a straight vertical chain; a curled one
folds back so its tip lands just below the knuckle.
"""
from handcontrol.models import Landmark

FINGER_X = {"index": 0.40, "middle": 0.47, "ring": 0.54, "pinky": 0.61}
FINGER_BASE = {"index": 5, "middle": 9, "ring": 13, "pinky": 17}
MCP_Y = 0.6
EXTENDED_Y = (0.50, 0.43, 0.37)  # pip, dip, tip
CURLED_Y = (0.52, 0.58, 0.62)

PALM_WIDTH = FINGER_X["pinky"] - FINGER_X["index"]


def make_hand(index=False, middle=False, ring=False, pinky=False, thumb_up=False, dy=0.0):
    """Returns 21 Landmarks; dy shifts the whole hand down the image."""
    pts = [None] * 21
    pts[0] = (0.5, 0.9)
    pts[1] = (0.35, 0.80)
    pts[2] = (0.30, 0.75)
    pts[3] = (0.28, 0.70)
    pts[4] = (0.30, 0.45) if thumb_up else (0.42, 0.70)

    flags = {"index": index, "middle": middle, "ring": ring, "pinky": pinky}
    for name, base in FINGER_BASE.items():
        x = FINGER_X[name]
        ys = EXTENDED_Y if flags[name] else CURLED_Y
        pts[base] = (x, MCP_Y)
        for offset, y in enumerate(ys, start=1):
            pts[base + offset] = (x, y)

    return [Landmark(x, y + dy) for x, y in pts]


class RecordingActions:
    """Action stub that remembers every call in order."""

    def __init__(self, fail_on=()):
        self.calls = []
        self.fail_on = set(fail_on)

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.fail_on:
            raise RuntimeError(f"{name} handler exploded")

    def click(self, x, y):
        self._record("click", x, y)

    def exit(self):
        self._record("exit")

    def toggle_theme(self):
        self._record("toggle_theme")

    def confetti(self):
        self._record("confetti")

    def breathing_sequence(self):
        self._record("breathing_sequence")

    def scroll(self, velocity):
        self._record("scroll", velocity)

    def names(self, include_scroll=False):
        return [c[0] for c in self.calls if include_scroll or c[0] != "scroll"]
