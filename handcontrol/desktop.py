import logging

import pyautogui

from .scroll import WheelAccumulator

logger = logging.getLogger(__name__)

# --- Safety & Performance ---
pyautogui.PAUSE = 0           # No delay between mouse commands
pyautogui.FAILSAFE = True     # Emergency stop on corner


class DesktopActions:
    """
    Applies dispatched gestures to the operating system through PyAutoGUI.
    Visual effects (click ring, theme, confetti, breathing) are handed to the HUD.
    """
    def __init__(self, hud, config):
        self.hud = hud
        self.config = config
        self.exit_requested = False
        self.wheel = WheelAccumulator(config.SCROLL_WHEEL_SCALE)

    def click(self, x, y):
        self.hud.pulse_click()
        pyautogui.click(x, y, _pause=False)

    def exit(self):
        self.exit_requested = True

    def toggle_theme(self):
        self.hud.toggle_theme()

    def confetti(self):
        self.hud.burst_confetti()

    def breathing_sequence(self):
        self.hud.start_breathing()

    def scroll(self, velocity):
        # PyAutoGUI scrolls up for positive clicks; positive velocity scrolls down.
        notches = self.wheel.feed(velocity)
        if notches:
            pyautogui.scroll(-notches, _pause=False)

    def move_cursor(self, pos):
        if self.config.MOVE_SYSTEM_CURSOR and pos is not None:
            pyautogui.moveTo(pos[0], pos[1], _pause=False)


def screen_size():
    width, height = pyautogui.size()
    return int(width), int(height)
