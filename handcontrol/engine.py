import time
import logging
from typing import Callable, List, Optional

from .actions import EDGE_ACTIONS, LoggingActions
from .classifier import GestureClassifier
from .config import Config
from .filters import LandmarkSmoother
from .geometry import GeometryEngine, to_frame
from .models import FrameResult, GestureChange, GestureLabel
from .scroll import ScrollIntegrator
from .state import GestureState

logger = logging.getLogger(__name__)


class GestureEngine:
    """
    One hand tracking session: smoother, classifier, state machine and
    scroll integrator behind a single per-frame entry point.

    Each call to process_frame() is one complete cycle. A frame that fails
    validation raises before any state is touched, so the host can log it,
    skip it and carry on.
    """
    def __init__(self, config: Optional[Config] = None, actions=None, pointer_source=None):
        self.config = config or Config()
        self.actions = actions or LoggingActions()

        self.smoother = LandmarkSmoother.from_config(self.config)
        # Clicks land wherever the pointer source says; by default our own pointer.
        self.pointer_source = pointer_source or self.smoother
        self.classifier = GestureClassifier(self.config)
        self.integrator = ScrollIntegrator.from_config(self.config)
        self.state = GestureState()

        self.scroll_gesture = GestureLabel(self.config.SCROLL_GESTURE)
        self.dispatch_table = {}
        for gesture, action in self.config.GESTURE_ACTIONS.items():
            if action not in EDGE_ACTIONS:
                raise ValueError(f"Unknown action '{action}' for gesture '{gesture}'")
            self.dispatch_table[GestureLabel(gesture)] = action
        if self.scroll_gesture in self.dispatch_table:
            raise ValueError(f"'{self.scroll_gesture.value}' cannot be both scroll and edge-triggered")

        self.is_active = False
        self.on_exit: Optional[Callable[[], None]] = None
        self._listeners: List[Callable[[GestureChange], None]] = []

    # --- Session lifecycle ---
    def start(self):
        self.reset()
        self.is_active = True
        logger.info("Gesture engine started")

    def stop(self):
        if not self.is_active:
            return
        self.reset()
        self.is_active = False
        logger.info("Gesture engine stopped")
        if self.on_exit:
            self.on_exit()

    def reset(self):
        self.state.reset()
        self.smoother.reset()

    def add_listener(self, callback: Callable[[GestureChange], None]):
        """Registers a callback for gesture label change events."""
        self._listeners.append(callback)

    # --- Frame processing ---
    def process_frame(self, landmarks, now=None) -> FrameResult:
        """Runs one cycle for a detector tick; landmarks is None when no hand is visible."""
        now = time.time() if now is None else now

        frame = None
        label = None
        if landmarks is not None:
            frame = to_frame(landmarks)
            features = GeometryEngine.extract_features(frame, self.config)
            label = self.classifier.classify(features, frame)

        pointer = None
        if frame is not None:
            pointer = self.smoother.observe(frame[self.config.POINTER_LANDMARK])

        change = None
        fired = []
        if label != self.state.current:
            change = self._transition(label, now)
            fired = self._dispatch_entry(label, now)

        if frame is not None and self.state.current == self.scroll_gesture:
            velocity = self.integrator.integrate(frame[self.config.POINTER_LANDMARK].y, self.state)
            self._call("scroll", velocity)

        return FrameResult(
            label=label,
            pointer=pointer,
            velocity=self.state.velocity,
            change=change,
            fired=fired,
        )

    def _transition(self, label, now):
        prev = self.state.current
        if prev == self.scroll_gesture:
            self.state.end_scroll()

        self.state.previous = prev
        self.state.current = label
        self.state.entered_at = now

        change = GestureChange(previous=prev, current=label, timestamp=now)
        logger.debug(f"Gesture {_name(prev)} -> {_name(label)}")
        for listener in self._listeners:
            try:
                listener(change)
            except Exception as e:
                logger.error(f"Gesture listener failed: {e}", exc_info=True)
        return change

    def _dispatch_entry(self, label, now):
        action = self.dispatch_table.get(label)
        if action is None:
            return []

        last = self.state.last_trigger_time.get(label)
        cooldown = self.config.cooldown_for(label.value)
        if last is not None and now - last <= cooldown:
            logger.debug(f"{action} suppressed, {label.value} cooling down")
            return []

        self.state.last_trigger_time[label] = now
        logger.info(f"Gesture {label.value} -> {action}")
        if action == "click":
            x, y = self.pointer_source.position()
            self._call(action, x, y)
        else:
            self._call(action)
        return [action]

    def _call(self, action, *args):
        handler = getattr(self.actions, action, None)
        if handler is None:
            logger.warning(f"No handler for action '{action}'")
            return
        try:
            handler(*args)
        except Exception as e:
            logger.error(f"Action '{action}' failed: {e}", exc_info=True)


def _name(label):
    return label.value if label is not None else "idle"
