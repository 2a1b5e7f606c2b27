import time
import logging

import cv2
import numpy as np

from .config import Config

logger = logging.getLogger(__name__)

FONT = cv2.FONT_HERSHEY_SIMPLEX

GESTURE_LABELS = {
    "palm": "SCROLL",
    "middle": "BREATHE",
    "three": "EXIT",
    "two": "CLICK",
    "point": "POINT",
    "thumbsup": "NICE!",
    "rock": "ROCK!",
    "fist": "FIST",
}

CONFETTI_COLORS = [
    (0, 215, 255), (107, 107, 255), (196, 205, 78), (209, 183, 69),
    (180, 206, 150), (167, 234, 255), (221, 160, 221), (200, 216, 152),
]

# Box breathing: four 4 second phases, five cycles.
BREATH_PHASES = [("BREATHE IN", 2.5), ("HOLD", 2.5), ("BREATHE OUT", 1.0), ("HOLD", 1.0)]
BREATH_PHASE_SECONDS = 4.0
BREATH_CYCLES = 5

# Expanding ring drawn around the pointer after a click.
CLICK_PULSE_SECONDS = 0.3
CLICK_PULSE_GROWTH = 30


class HUD:
    """Heads-Up Display for the desktop host."""

    def __init__(self, config=None):
        self.config = config or Config()
        self.dark = True
        self.confetti = None  # (start_time, particles)
        self.breathing_started = None
        self.click_pulse = None

    # --- Effects triggered by gestures ---
    def toggle_theme(self):
        self.dark = not self.dark
        logger.info(f"Theme: {'dark' if self.dark else 'light'}")

    def burst_confetti(self, count=80):
        rng = np.random.default_rng()
        particles = np.column_stack([
            rng.random(count),              # x, normalized
            rng.uniform(-0.2, 0.0, count),  # y start above the frame
            rng.uniform(0.25, 0.5, count),  # fall speed, frame heights per second
            rng.integers(0, len(CONFETTI_COLORS), count),
            rng.uniform(3, 8, count),       # radius px
        ])
        self.confetti = (time.time(), particles)

    def start_breathing(self):
        self.breathing_started = time.time()

    def pulse_click(self, now=None):
        self.click_pulse = time.time() if now is None else now

    # --- Rendering ---
    def render(self, img, result, fps=0.0, show_video=True, now=None):
        """Draws the status pill, pointer, scroll bar and any running effect."""
        try:
            if img is None or img.size == 0:
                return
            now = time.time() if now is None else now
            self._render_pill(img, result, fps, show_video)
            self._render_click_pulse(img, result, now)
            if result is not None and result.velocity:
                self._render_velocity(img, result.velocity)
            self._render_confetti(img, now)
            self._render_breathing(img, now)
        except Exception as e:
            logger.error(f"HUD rendering error: {e}")

    def _render_pill(self, img, result, fps, show_video):
        h, w = img.shape[:2]
        iw, ih = 360, 60
        ix, iy = (w - iw) // 2, 15
        bg = self.config.UI_BG if self.dark else self.config.UI_BG_LIGHT
        fg = self.config.UI_TEXT if self.dark else self.config.UI_TEXT_DARK

        overlay = img.copy()
        cv2.rectangle(overlay, (ix + 25, iy), (ix + iw - 25, iy + ih), bg, -1)
        cv2.circle(overlay, (ix + 25, iy + ih // 2), ih // 2, bg, -1)
        cv2.circle(overlay, (ix + iw - 25, iy + ih // 2), ih // 2, bg, -1)
        alpha = 0.8 if show_video else 1.0
        cv2.addWeighted(overlay, alpha, img, 1 - alpha, 0, img)

        if result is None or result.label is None:
            text, color = "NO HAND", self.config.UI_WARN
        else:
            text = GESTURE_LABELS.get(result.label.value, "TRACKING")
            color = self.config.UI_ACCENT if result.fired else self.config.UI_INFO
        cv2.circle(img, (ix + 35, iy + ih // 2), 6, color, -1)
        cv2.putText(img, text, (ix + 60, iy + 38), FONT, 0.7, fg, 2, cv2.LINE_AA)
        cv2.putText(img, f"FPS: {int(fps)}", (ix + iw - 90, iy + 36), FONT, 0.4, (120, 120, 120), 1)

        if result is not None and result.pointer is not None:
            px, py = self._pointer_px(img, result.pointer)
            cv2.circle(img, (px, py), 10, color, 2)
            cv2.circle(img, (px, py), 4, color, -1)

    def _render_click_pulse(self, img, result, now):
        if self.click_pulse is None:
            return
        elapsed = now - self.click_pulse
        if elapsed > CLICK_PULSE_SECONDS:
            self.click_pulse = None
            return
        if result is None or result.pointer is None:
            return
        px, py = self._pointer_px(img, result.pointer)
        radius = 10 + int(CLICK_PULSE_GROWTH * elapsed / CLICK_PULSE_SECONDS)
        cv2.circle(img, (px, py), radius, self.config.UI_ACCENT, 2)

    def _pointer_px(self, img, pointer):
        h, w = img.shape[:2]
        return (int(pointer[0] / self.config.VIEWPORT_WIDTH * w),
                int(pointer[1] / self.config.VIEWPORT_HEIGHT * h))

    def _render_velocity(self, img, velocity):
        h, w = img.shape[:2]
        mid = h // 2
        span = int((h // 2 - 40) * velocity / self.config.SCROLL_MAX_SPEED)
        cv2.line(img, (w - 20, mid), (w - 20, mid + span), self.config.UI_INFO, 6)

    def _render_confetti(self, img, now):
        if self.confetti is None:
            return
        started, particles = self.confetti
        elapsed = now - started
        h, w = img.shape[:2]
        ys = particles[:, 1] + particles[:, 2] * elapsed
        if np.all(ys > 1.05):
            self.confetti = None
            return
        for (x, _, _, color_idx, radius), y in zip(particles, ys):
            cv2.circle(img, (int(x * w), int(y * h)), int(radius), CONFETTI_COLORS[int(color_idx)], -1)

    def _render_breathing(self, img, now):
        if self.breathing_started is None:
            return
        elapsed = now - self.breathing_started
        step = int(elapsed // BREATH_PHASE_SECONDS)
        if step >= len(BREATH_PHASES) * BREATH_CYCLES:
            self.breathing_started = None
            return
        text, scale = BREATH_PHASES[step % len(BREATH_PHASES)]
        count = 4 - int(elapsed % BREATH_PHASE_SECONDS)

        h, w = img.shape[:2]
        cv2.addWeighted(np.zeros_like(img), 0.6, img, 0.4, 0, img)
        cv2.circle(img, (w // 2, h // 2), int(20 * scale), (255, 255, 255), 2)
        cv2.putText(img, text, (w // 2 - 90, h // 2 + 90), FONT, 0.8, (255, 255, 255), 2, cv2.LINE_AA)
        cv2.putText(img, str(count), (w // 2 - 10, h // 2 + 10), FONT, 1.0, (255, 255, 255), 2, cv2.LINE_AA)
