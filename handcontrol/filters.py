from collections import deque

from .geometry import GeometryEngine


class SmoothingBuffer:
    """Fixed-capacity FIFO of recent samples; the oldest is evicted on overflow."""

    def __init__(self, capacity=8):
        if capacity < 1:
            raise ValueError("Capacity must be at least 1")
        self.capacity = int(capacity)
        self._samples = deque(maxlen=self.capacity)

    def push(self, value):
        self._samples.append(float(value))

    def mean(self):
        if not self._samples:
            return None
        return sum(self._samples) / len(self._samples)

    def clear(self):
        self._samples.clear()

    def __len__(self):
        return len(self._samples)


class LandmarkSmoother:
    """Windowed mean followed by an exponential lerp of the pointer fingertip.

    The running estimate lives in normalized camera space and starts at the
    frame centre; observe() returns it mirrored and scaled to viewport pixels.
    """

    def __init__(self, window=8, alpha=0.4, width=1920, height=1080):
        if not 0 < alpha <= 1:
            raise ValueError("Alpha must be in (0, 1]")
        self.alpha = float(alpha)
        self.width = width
        self.height = height
        self.x_buffer = SmoothingBuffer(window)
        self.y_buffer = SmoothingBuffer(window)
        self.estimate_x = 0.5
        self.estimate_y = 0.5

    @classmethod
    def from_config(cls, config):
        return cls(
            window=config.SMOOTHING_WINDOW,
            alpha=config.SMOOTHING_ALPHA,
            width=config.VIEWPORT_WIDTH,
            height=config.VIEWPORT_HEIGHT,
        )

    def observe(self, point):
        """Feeds one raw sample and returns the smoothed viewport position."""
        self.x_buffer.push(point.x)
        self.y_buffer.push(point.y)

        self.estimate_x += (self.x_buffer.mean() - self.estimate_x) * self.alpha
        self.estimate_y += (self.y_buffer.mean() - self.estimate_y) * self.alpha
        return self.position()

    def position(self):
        return GeometryEngine.to_viewport(self.estimate_x, self.estimate_y, self.width, self.height)

    def reset(self):
        self.x_buffer.clear()
        self.y_buffer.clear()
        self.estimate_x = 0.5
        self.estimate_y = 0.5
