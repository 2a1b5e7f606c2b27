import logging

from .models import (
    INDEX_PIP,
    INDEX_TIP,
    MIDDLE_MCP,
    MIDDLE_TIP,
    PINKY_PIP,
    PINKY_TIP,
    RING_PIP,
    RING_TIP,
    GestureLabel,
)

logger = logging.getLogger(__name__)


class GestureClassifier:
    """
    Deterministic decision table from one frame's features to a gesture label.
    Rules run most specific first and the first match wins; the classifier
    keeps no memory of earlier frames.
    """
    def __init__(self, config):
        self.config = config

    def classify(self, features, lm):
        f = features
        count = f.extended_count

        # 1. Thumbs up: only the thumb is raised.
        if f.thumb_up and count == 0:
            return GestureLabel.THUMBS_UP

        # 2. Middle finger alone, with a stricter curl check on the others.
        if self._is_middle_only(f, lm):
            return GestureLabel.MIDDLE

        # 3. Rock: index + pinky.
        if f.index and not f.middle and not f.ring and f.pinky:
            return GestureLabel.ROCK

        # 4. Three: index + middle + ring.
        if f.index and f.middle and f.ring and not f.pinky:
            return GestureLabel.THREE

        # 5. Two: index + middle.
        if f.index and f.middle and not f.ring and not f.pinky:
            return GestureLabel.TWO

        # 6. Point: index alone.
        if f.index and not f.middle and not f.ring and not f.pinky:
            return GestureLabel.POINT

        # 7. Palm: all four fingers, thumb ignored.
        if count >= 4:
            return GestureLabel.PALM

        # 8. Fist: nothing extended and the thumb is not up.
        if count == 0 and not f.thumb_up:
            return GestureLabel.FIST

        logger.debug(f"Ambiguous pose: {count} fingers extended")
        return GestureLabel.NONE

    def _is_middle_only(self, f, lm):
        middle_up = f.middle and lm[MIDDLE_TIP].y < lm[MIDDLE_MCP].y - self.config.MIDDLE_RAISE_MARGIN
        if not middle_up:
            return False
        # Tips below their PIP joints (larger y) confirm a real curl.
        index_down = not f.index and lm[INDEX_TIP].y > lm[INDEX_PIP].y
        ring_down = not f.ring and lm[RING_TIP].y > lm[RING_PIP].y
        pinky_down = not f.pinky and lm[PINKY_TIP].y > lm[PINKY_PIP].y
        return index_down and ring_down and pinky_down
