import os
import logging
import urllib.request

import cv2
import mediapipe as mp
from mediapipe.tasks import python
from mediapipe.tasks.python import vision

logger = logging.getLogger(__name__)

MODEL_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"


class DetectorUnavailableError(RuntimeError):
    """The landmark model could not be loaded; raised once at start-up."""


def download_model(save_path):
    """Fetches the Hand Landmarker model unless it is already on disk."""
    if os.path.exists(save_path):
        logger.info(f"Model already exists at {save_path}")
        return save_path
    folder = os.path.dirname(save_path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    logger.info(f"Downloading Hand Landmarker model to {save_path}...")
    urllib.request.urlretrieve(MODEL_URL, save_path)
    logger.info("Download complete")
    return save_path


class HandDetector:
    """
    Wraps the MediaPipe Tasks hand landmarker.
    Produces the 21 normalized landmarks of a single hand per frame, or None.
    """
    def __init__(self, model_path, min_confidence=0.6):
        if not os.path.exists(model_path):
            raise DetectorUnavailableError(
                f"Model file not found at {model_path}. Run download_model.py first."
            )
        try:
            base_options = python.BaseOptions(model_asset_path=model_path)
            options = vision.HandLandmarkerOptions(
                base_options=base_options,
                num_hands=1,
                min_hand_detection_confidence=min_confidence,
                min_hand_presence_confidence=min_confidence,
                min_tracking_confidence=min_confidence,
            )
            self.landmarker = vision.HandLandmarker.create_from_options(options)
        except Exception as e:
            raise DetectorUnavailableError(f"Failed to initialize HandLandmarker: {e}") from e
        logger.info(f"Hand landmarker loaded from {model_path}")

    def detect(self, frame_bgr):
        # MediaPipe requires RGB; OpenCV delivers BGR.
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)
        results = self.landmarker.detect(mp_image)
        if not results.hand_landmarks:
            return None
        return results.hand_landmarks[0]

    def close(self):
        self.landmarker.close()
