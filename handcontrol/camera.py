import time
import queue
import logging
import threading

import cv2

logger = logging.getLogger(__name__)


class FrameSource:
    """Captures webcam frames and runs the detector on a background thread.

    Results go through a one-slot queue: a newer frame replaces one the
    consumer has not taken yet, so the single consumer always sees the latest
    tick and never two at once.
    """

    # Consecutive failed reads before the camera is treated as gone
    MAX_READ_FAILURES = 30

    def __init__(self, detector, src=0, width=640, height=480, fps=30):
        self.detector = detector
        self.src = src
        self.width = width
        self.height = height
        self.fps = fps

        self.cap = None
        self.stopped = True
        self.thread = None
        self.frames = queue.Queue(maxsize=1)

    def _init_camera(self):
        self.cap = cv2.VideoCapture(self.src)
        if not self.cap.isOpened():
            logger.error(f"Failed to open camera {self.src}")
            return False
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.fps)
        self.cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)
        return True

    def start(self):
        if not self._init_camera():
            raise RuntimeError("Failed to initialize camera")
        self.stopped = False
        self.thread = threading.Thread(target=self._capture_loop, daemon=True)
        self.thread.start()
        logger.info(f"Camera started: {self.width}x{self.height}@{self.fps}fps")
        return self

    def _capture_loop(self):
        failures = 0
        while not self.stopped:
            success, frame = self.cap.read()
            if not success:
                failures += 1
                if failures >= self.MAX_READ_FAILURES:
                    logger.error(f"Camera stopped delivering frames after {failures} failed reads")
                    self.stopped = True
                    break
                time.sleep(0.01)
                continue
            failures = 0

            # Landmarks come from the raw image; the pointer mapping mirrors them.
            try:
                landmarks = self.detector.detect(frame)
            except Exception as e:
                logger.error(f"Detection failed: {e}")
                continue
            self._offer((time.time(), cv2.flip(frame, 1), landmarks))

    def _offer(self, item):
        if self.frames.full():
            try:
                self.frames.get_nowait()
            except queue.Empty:
                pass
        try:
            self.frames.put_nowait(item)
        except queue.Full:
            pass

    def get(self, timeout=0.1):
        """Returns (timestamp, mirrored display frame, raw landmarks) or None if nothing arrived in time."""
        try:
            return self.frames.get(timeout=timeout)
        except queue.Empty:
            return None

    def is_running(self):
        return not self.stopped and self.cap is not None and self.cap.isOpened()

    def release(self):
        self.stopped = True
        if self.thread is not None:
            self.thread.join(timeout=2.0)
        if self.cap is not None:
            self.cap.release()
        logger.info("Camera released")
