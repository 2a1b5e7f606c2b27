import math
from collections.abc import Mapping, Sequence

from .models import (
    FINGERS,
    INDEX_MCP,
    NUM_LANDMARKS,
    PINKY_MCP,
    THUMB_MCP,
    THUMB_TIP,
    WRIST,
    FeatureSet,
    Landmark,
)


def to_landmark(entry):
    """Reads a point from a MediaPipe landmark, a mapping or an (x, y[, z]) sequence."""
    if hasattr(entry, "x") and hasattr(entry, "y"):
        return Landmark(float(entry.x), float(entry.y), float(getattr(entry, "z", 0.0) or 0.0))
    if isinstance(entry, Mapping):
        if "x" not in entry or "y" not in entry:
            raise ValueError("Landmark mapping needs 'x' and 'y' keys")
        return Landmark(float(entry["x"]), float(entry["y"]), float(entry.get("z") or 0.0))
    if isinstance(entry, Sequence) and not isinstance(entry, str) and len(entry) >= 2:
        z = entry[2] if len(entry) >= 3 else 0.0
        return Landmark(float(entry[0]), float(entry[1]), float(z or 0.0))
    raise ValueError(f"Unsupported landmark format: {entry!r}")


def to_frame(landmarks):
    """Normalizes a detector result into an immutable 21-point frame."""
    points = tuple(to_landmark(p) for p in landmarks)
    if len(points) != NUM_LANDMARKS:
        raise ValueError(f"Expected {NUM_LANDMARKS} landmarks, got {len(points)}")
    return points


class GeometryEngine:
    """
    Pure geometric measurements over a single landmark frame.
    Nothing here keeps state between frames.
    """
    @staticmethod
    def get_distance(p1, p2):
        # Euclidean distance; z is 0 for 2D landmarks.
        return math.sqrt((p1.x - p2.x) ** 2 + (p1.y - p2.y) ** 2 + (p1.z - p2.z) ** 2)

    @staticmethod
    def joint_angle(p1, p2, p3):
        """Angle in degrees at p2 between its neighbours p1 and p3.

        A straight chain measures 180. A zero-length segment also reports
        180 so degenerate input reads as a straight finger.
        """
        v1 = (p1.x - p2.x, p1.y - p2.y, p1.z - p2.z)
        v2 = (p3.x - p2.x, p3.y - p2.y, p3.z - p2.z)

        mag1 = math.sqrt(v1[0] ** 2 + v1[1] ** 2 + v1[2] ** 2)
        mag2 = math.sqrt(v2[0] ** 2 + v2[1] ** 2 + v2[2] ** 2)
        if mag1 == 0 or mag2 == 0:
            return 180.0

        cosine = (v1[0] * v2[0] + v1[1] * v2[1] + v1[2] * v2[2]) / (mag1 * mag2)
        cosine = max(-1.0, min(1.0, cosine))
        return math.degrees(math.acos(cosine))

    @staticmethod
    def palm_width(lm):
        return GeometryEngine.get_distance(lm[INDEX_MCP], lm[PINKY_MCP])

    @staticmethod
    def is_finger_extended(lm, mcp, pip, dip, tip, palm_width, config):
        # Either test is enough: a finger foreshortened by the camera angle
        # can look bent while its tip is still far from the knuckle.
        straight = GeometryEngine.joint_angle(lm[mcp], lm[pip], lm[dip]) > config.FINGER_STRAIGHT_ANGLE
        reach = GeometryEngine.get_distance(lm[tip], lm[mcp]) > palm_width * config.FINGER_REACH_RATIO
        return straight or reach

    @staticmethod
    def is_thumb_extended(lm, palm_width, config):
        spread = GeometryEngine.get_distance(lm[THUMB_TIP], lm[INDEX_MCP])
        return spread > palm_width * config.THUMB_SPREAD_RATIO

    @staticmethod
    def is_thumb_up(lm, config):
        # Smaller y is higher in image space.
        tip_y = lm[THUMB_TIP].y
        return (tip_y < lm[THUMB_MCP].y - config.THUMB_UP_MCP_MARGIN
                and tip_y < lm[WRIST].y - config.THUMB_UP_WRIST_MARGIN)

    @staticmethod
    def extract_features(lm, config):
        """Computes the FeatureSet for one frame."""
        width = GeometryEngine.palm_width(lm)
        flags = {
            name: GeometryEngine.is_finger_extended(lm, *joints, width, config)
            for name, joints in FINGERS.items()
        }
        return FeatureSet(
            palm_width=width,
            index=flags["index"],
            middle=flags["middle"],
            ring=flags["ring"],
            pinky=flags["pinky"],
            thumb_extended=GeometryEngine.is_thumb_extended(lm, width, config),
            thumb_up=GeometryEngine.is_thumb_up(lm, config),
        )

    @staticmethod
    def to_viewport(norm_x, norm_y, width, height):
        # The camera image is mirrored, so x is flipped before scaling.
        return (1.0 - norm_x) * width, norm_y * height
