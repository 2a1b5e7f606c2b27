"""
Type definitions shared by the gesture core and its hosts.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Protocol, Tuple, runtime_checkable


# Landmark indices (MediaPipe hand topology)
WRIST = 0
THUMB_CMC, THUMB_MCP, THUMB_IP, THUMB_TIP = 1, 2, 3, 4
INDEX_MCP, INDEX_PIP, INDEX_DIP, INDEX_TIP = 5, 6, 7, 8
MIDDLE_MCP, MIDDLE_PIP, MIDDLE_DIP, MIDDLE_TIP = 9, 10, 11, 12
RING_MCP, RING_PIP, RING_DIP, RING_TIP = 13, 14, 15, 16
PINKY_MCP, PINKY_PIP, PINKY_DIP, PINKY_TIP = 17, 18, 19, 20

NUM_LANDMARKS = 21

# (mcp, pip, dip, tip) per non-thumb finger
FINGERS = {
    "index": (INDEX_MCP, INDEX_PIP, INDEX_DIP, INDEX_TIP),
    "middle": (MIDDLE_MCP, MIDDLE_PIP, MIDDLE_DIP, MIDDLE_TIP),
    "ring": (RING_MCP, RING_PIP, RING_DIP, RING_TIP),
    "pinky": (PINKY_MCP, PINKY_PIP, PINKY_DIP, PINKY_TIP),
}


class Landmark(NamedTuple):
    """One normalized hand point; z is relative depth and may be absent."""
    x: float
    y: float
    z: float = 0.0


LandmarkFrame = Tuple[Landmark, ...]


class GestureLabel(str, Enum):
    PALM = "palm"
    POINT = "point"
    TWO = "two"
    THREE = "three"
    ROCK = "rock"
    MIDDLE = "middle"
    THUMBS_UP = "thumbsup"
    FIST = "fist"
    NONE = "none"  # ambiguous pose, never dispatched


@dataclass(frozen=True)
class FeatureSet:
    """Per-frame geometric summary of a hand."""
    palm_width: float
    index: bool
    middle: bool
    ring: bool
    pinky: bool
    thumb_extended: bool
    thumb_up: bool

    @property
    def extended_count(self) -> int:
        return sum((self.index, self.middle, self.ring, self.pinky))


@dataclass(frozen=True)
class GestureChange:
    """Emitted whenever the current label changes (None means no hand)."""
    previous: Optional[GestureLabel]
    current: Optional[GestureLabel]
    timestamp: float


@dataclass
class FrameResult:
    """Everything one processing cycle produced."""
    label: Optional[GestureLabel]
    pointer: Optional[Tuple[float, float]]
    velocity: float
    change: Optional[GestureChange] = None
    fired: List[str] = field(default_factory=list)


@runtime_checkable
class PointerSource(Protocol):
    """Anything that can report the current fingertip position in viewport pixels."""

    def position(self) -> Tuple[float, float]:
        ...


class FixedPointerSource:
    """Trivial pointer source pinned to one coordinate."""

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self._pos = (float(x), float(y))

    def position(self) -> Tuple[float, float]:
        return self._pos


@runtime_checkable
class Actions(Protocol):
    """Side effects the engine dispatches to its host. Calls are fire-and-forget."""

    def click(self, x: float, y: float) -> None:
        ...

    def exit(self) -> None:
        ...

    def toggle_theme(self) -> None:
        ...

    def confetti(self) -> None:
        ...

    def breathing_sequence(self) -> None:
        ...

    def scroll(self, velocity: float) -> None:
        ...
