from dataclasses import dataclass, field
from typing import Dict, Optional

from .models import GestureLabel


@dataclass
class GestureState:
    """
    Mutable per-session memory of the gesture state machine.
    current is None while no hand is tracked (Idle).
    """
    current: Optional[GestureLabel] = None
    previous: Optional[GestureLabel] = None
    entered_at: float = 0.0
    last_trigger_time: Dict[GestureLabel, float] = field(default_factory=dict)
    scroll_anchor_y: Optional[float] = None
    velocity: float = 0.0

    def end_scroll(self):
        self.scroll_anchor_y = None
        self.velocity = 0.0

    def reset(self):
        self.current = None
        self.previous = None
        self.entered_at = 0.0
        self.last_trigger_time.clear()
        self.end_scroll()
