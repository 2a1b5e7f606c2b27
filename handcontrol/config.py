import copy
import json
import logging
import os

logger = logging.getLogger(__name__)


class Config:
    """Central configuration for a hand control session.

    Class attributes hold the defaults. Instances may override any of them,
    e.g. ``Config(scroll_sensitivity=2.5)``; keys are case insensitive.
    """

    # --- Camera Settings ---
    WIDTH = 640
    HEIGHT = 480
    FPS = 30

    # --- Viewport (pointer output space, pixels) ---
    VIEWPORT_WIDTH = 1920
    VIEWPORT_HEIGHT = 1080

    # --- Pointer Smoothing ---
    SMOOTHING_WINDOW = 8          # Raw fingertip samples averaged per axis
    SMOOTHING_ALPHA = 0.4         # Lerp factor of the running estimate (higher = snappier)
    POINTER_LANDMARK = 8          # Index fingertip drives the pointer

    # --- Scroll ---
    SCROLL_SENSITIVITY = 3.0      # Multiplier applied to the vertical delta
    SCROLL_DEADZONE = 0.015       # Normalized motion ignored as jitter
    SCROLL_MAX_SPEED = 25.0       # Clamp for a single raw sample
    SCROLL_BLEND = 0.3            # Weight of the new sample in the velocity blend
    SCROLL_GESTURE = "palm"       # Level-triggered gesture feeding the integrator

    # --- Finger Thresholds ---
    FINGER_STRAIGHT_ANGLE = 155.0  # PIP angle (deg) above which a finger is straight
    FINGER_REACH_RATIO = 0.7       # Tip-to-MCP distance, in palm widths, counted as extended
    THUMB_SPREAD_RATIO = 0.5       # Thumb tip to index MCP, in palm widths
    THUMB_UP_MCP_MARGIN = 0.06     # Thumb tip must sit this far above the thumb MCP
    THUMB_UP_WRIST_MARGIN = 0.08   # ...and this far above the wrist
    MIDDLE_RAISE_MARGIN = 0.05     # Middle tip above its MCP for the easter egg pose

    # --- Dispatch ---
    # Edge-triggered gestures and the action each one fires on entry
    GESTURE_ACTIONS = {
        "two": "click",
        "three": "exit",
        "rock": "toggle_theme",
        "thumbsup": "confetti",
        "middle": "breathing_sequence",
    }
    # Minimum seconds between two firings of the same gesture
    COOLDOWNS = {
        "two": 0.5,
        "three": 1.0,
        "rock": 1.0,
        "thumbsup": 2.0,
        "middle": 10.0,
    }

    # --- Desktop Host ---
    MOVE_SYSTEM_CURSOR = True     # Drive the OS cursor from the smoothed pointer
    SCROLL_WHEEL_SCALE = 100.0    # Pixels of scroll velocity per mouse wheel notch

    # --- Hand Detection Thresholds ---
    MEDIAPIPE_CONFIDENCE = 0.6
    MODEL_PATH = os.path.join("assets", "hand_landmarker.task")

    # --- UI Theme (BGR format) ---
    UI_BG = (15, 15, 15)
    UI_BG_LIGHT = (235, 235, 235)
    UI_ACCENT = (120, 255, 0)
    UI_WARN = (0, 100, 255)
    UI_INFO = (255, 132, 10)
    UI_TEXT = (240, 240, 240)
    UI_TEXT_DARK = (30, 30, 30)

    def __init__(self, **overrides):
        # Copy mutable defaults so sessions never share dispatch tables.
        self.GESTURE_ACTIONS = dict(type(self).GESTURE_ACTIONS)
        self.COOLDOWNS = dict(type(self).COOLDOWNS)
        for key, value in overrides.items():
            name = key.upper()
            if name.startswith("_") or not hasattr(type(self), name) or callable(getattr(type(self), name)):
                raise KeyError(f"Unknown configuration key: {key}")
            if isinstance(value, dict):
                merged = dict(getattr(self, name))
                merged.update(value)
                value = merged
            setattr(self, name, copy.deepcopy(value))

    @classmethod
    def from_json(cls, path):
        """Build a Config from a JSON object of overrides.

        A missing file is not an error: defaults are used.
        """
        if not os.path.exists(path):
            logger.warning(f"Config '{path}' not found, using defaults")
            return cls()
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config '{path}' must contain a JSON object")
        logger.info(f"Loaded {len(data)} config overrides from {path}")
        return cls(**data)

    def is_overridden(self, key):
        """True when this instance was given its own value for key."""
        name = key.upper()
        if name in ("GESTURE_ACTIONS", "COOLDOWNS"):
            return getattr(self, name) != getattr(type(self), name)
        return name in vars(self)

    def cooldown_for(self, gesture):
        return float(self.COOLDOWNS.get(gesture, 0.0))

    def validate(self):
        """Validate all configuration parameters."""
        assert 0 < self.WIDTH <= 1920, "Width must be between 0 and 1920"
        assert 0 < self.HEIGHT <= 1080, "Height must be between 0 and 1080"
        assert 0 < self.FPS <= 120, "FPS must be between 0 and 120"
        assert self.VIEWPORT_WIDTH > 0 and self.VIEWPORT_HEIGHT > 0, "Viewport must be positive"
        assert 1 <= self.SMOOTHING_WINDOW <= 32, "Smoothing window should be 1-32"
        assert 0 < self.SMOOTHING_ALPHA <= 1.0, "Smoothing alpha should be 0-1.0"
        assert 0 <= self.POINTER_LANDMARK <= 20, "Pointer landmark must be 0-20"
        assert self.SCROLL_SENSITIVITY > 0, "Scroll sensitivity must be positive"
        assert 0 <= self.SCROLL_DEADZONE < 0.5, "Scroll deadzone should be 0-0.5"
        assert self.SCROLL_MAX_SPEED > 0, "Scroll max speed must be positive"
        assert 0 < self.SCROLL_BLEND <= 1.0, "Scroll blend should be 0-1.0"
        assert 0 < self.FINGER_STRAIGHT_ANGLE < 180, "Straight angle should be 0-180"
        assert all(c >= 0 for c in self.COOLDOWNS.values()), "Cooldowns must be non-negative"
        assert self.SCROLL_WHEEL_SCALE > 0, "Scroll wheel scale must be positive"
        assert 0 < self.MEDIAPIPE_CONFIDENCE <= 1.0, "Confidence must be 0-1.0"
