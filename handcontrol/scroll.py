class ScrollIntegrator:
    """
    Turns vertical fingertip motion into a smoothed scroll velocity.

    Called once per frame while the scroll gesture is held. The anchor is the
    previous sample, so every call measures frame-to-frame motion. Positive
    velocity means the fingertip moved down the image.
    """
    def __init__(self, sensitivity=3.0, deadzone=0.015, max_speed=25.0, blend=0.3):
        self.sensitivity = sensitivity
        self.deadzone = deadzone
        self.max_speed = max_speed
        self.blend = blend

    @classmethod
    def from_config(cls, config):
        return cls(
            sensitivity=config.SCROLL_SENSITIVITY,
            deadzone=config.SCROLL_DEADZONE,
            max_speed=config.SCROLL_MAX_SPEED,
            blend=config.SCROLL_BLEND,
        )

    def integrate(self, current_y, state):
        # First frame of the gesture only sets the reference.
        if state.scroll_anchor_y is None:
            state.scroll_anchor_y = current_y
            return state.velocity

        delta = current_y - state.scroll_anchor_y
        state.scroll_anchor_y = current_y

        if abs(delta) <= self.deadzone:
            return state.velocity

        raw = delta * self.sensitivity * 100
        raw = max(-self.max_speed, min(self.max_speed, raw))
        state.velocity = state.velocity * (1 - self.blend) + raw * self.blend
        return state.velocity


class WheelAccumulator:
    """
    Converts scroll velocity (pixels per frame) into whole mouse wheel notches.

    The fractional part carries over to the next frame, so a slow steady
    velocity still scrolls every few frames instead of rounding to nothing.
    """
    def __init__(self, pixels_per_notch=100.0):
        if pixels_per_notch <= 0:
            raise ValueError("pixels_per_notch must be positive")
        self.pixels_per_notch = float(pixels_per_notch)
        self.remainder = 0.0

    def feed(self, velocity):
        """Returns the notches to emit this frame; positive means down."""
        if not velocity:
            # Velocity is zero on the first frame of every scroll.
            self.remainder = 0.0
            return 0
        self.remainder += velocity / self.pixels_per_notch
        notches = int(self.remainder)
        self.remainder -= notches
        return notches

    def reset(self):
        self.remainder = 0.0
