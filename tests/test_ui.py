"""
Tests for HUD drawing on blank canvases.
"""
import unittest

import numpy as np

from handcontrol.config import Config
from handcontrol.models import FrameResult
from handcontrol.ui import HUD

CANVAS_W, CANVAS_H = 400, 200


def blank():
    return np.zeros((CANVAS_H, CANVAS_W, 3), dtype=np.uint8)


class TestHUD(unittest.TestCase):

    def setUp(self):
        self.config = Config(viewport_width=CANVAS_W, viewport_height=CANVAS_H,
                             ui_bg=(1, 2, 3), ui_warn=(7, 8, 9), ui_accent=(0, 250, 0))
        self.hud = HUD(self.config)
        self.centre = FrameResult(label=None, pointer=(200.0, 100.0), velocity=0.0)

    def test_colours_come_from_instance_config(self):
        img = blank()
        self.hud.render(img, None, show_video=False, now=0.0)
        # Pill background above the text, and the status dot.
        self.assertEqual(tuple(img[20, 150]), (1, 2, 3))
        self.assertEqual(tuple(img[45, 55]), (7, 8, 9))

    def test_click_pulse_ring_expands_then_expires(self):
        self.hud.pulse_click(now=0.0)

        img = blank()
        self.hud.render(img, self.centre, show_video=False, now=0.15)
        # Radius is 10 + 30 * 0.15 / 0.3 = 25 px.
        self.assertEqual(tuple(img[100, 225]), (0, 250, 0))

        img = blank()
        self.hud.render(img, self.centre, show_video=False, now=1.0)
        self.assertIsNone(self.hud.click_pulse)
        self.assertEqual(tuple(img[100, 225]), (0, 0, 0))

    def test_no_pulse_without_click(self):
        img = blank()
        self.hud.render(img, self.centre, show_video=False, now=0.15)
        self.assertEqual(tuple(img[100, 225]), (0, 0, 0))

    def test_toggle_theme(self):
        self.assertTrue(self.hud.dark)
        self.hud.toggle_theme()
        self.assertFalse(self.hud.dark)


if __name__ == "__main__":
    unittest.main()
