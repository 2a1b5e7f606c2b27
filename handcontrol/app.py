import argparse
import time
import logging

import cv2
import numpy as np

from .camera import FrameSource
from .config import Config
from .desktop import DesktopActions, screen_size
from .detector import DetectorUnavailableError, HandDetector
from .engine import GestureEngine
from .ui import HUD

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Hand gesture pointer, scroll and shortcut control.")
    parser.add_argument("--config", help="JSON file of configuration overrides")
    parser.add_argument("--camera", type=int, default=0, help="Camera index (default: 0)")
    parser.add_argument("--model", help="Path to hand_landmarker.task")
    parser.add_argument("--show-video", action="store_true", help="Start with the camera feed visible")
    parser.add_argument("--no-cursor", action="store_true", help="Do not move the system cursor")
    return parser.parse_args(argv)


def main(argv=None):
    """Runs a desktop hand control session until 'q', the exit gesture or Ctrl+C."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    args = parse_args(argv)

    try:
        config = Config.from_json(args.config) if args.config else Config()
        # An explicit viewport in the config file wins over the screen size.
        if not (config.is_overridden("viewport_width") or config.is_overridden("viewport_height")):
            config.VIEWPORT_WIDTH, config.VIEWPORT_HEIGHT = screen_size()
        if args.no_cursor:
            config.MOVE_SYSTEM_CURSOR = False
        if args.model:
            config.MODEL_PATH = args.model
        config.validate()
    except (AssertionError, KeyError, ValueError) as e:
        logger.error(f"Configuration validation failed: {e}")
        return 1

    try:
        detector = HandDetector(config.MODEL_PATH, min_confidence=config.MEDIAPIPE_CONFIDENCE)
    except DetectorUnavailableError as e:
        logger.error(f"Hand detector unavailable: {e}")
        return 1

    try:
        source = FrameSource(detector, src=args.camera, width=config.WIDTH,
                             height=config.HEIGHT, fps=config.FPS).start()
    except Exception as e:
        logger.error(f"Failed to initialize camera: {e}")
        detector.close()
        return 1

    hud = HUD(config)
    actions = DesktopActions(hud, config)
    engine = GestureEngine(config, actions=actions)
    engine.on_exit = lambda: logger.info("Hand control session ended")
    engine.add_listener(lambda change: logger.info(
        f"Gesture: {change.previous.value if change.previous else 'idle'} -> "
        f"{change.current.value if change.current else 'idle'}"
    ))
    engine.start()

    show_video = args.show_video
    p_time = 0
    frame_count = 0
    skipped = 0

    logger.info("Palm = scroll | 2 fingers = click | 3 fingers = exit")
    logger.info("Press [V] to toggle video feed, [Q] to quit")

    try:
        while engine.is_active:
            item = source.get(timeout=0.1)
            if item is None:
                if not source.is_running():
                    logger.error("Camera is no longer running")
                    break
            else:
                timestamp, frame, landmarks = item
                frame_count += 1
                try:
                    result = engine.process_frame(landmarks, now=timestamp)
                except Exception as e:
                    # The engine validates before mutating, so its state is still good.
                    skipped += 1
                    logger.error(f"Skipping frame {frame_count}: {e}", exc_info=True)
                    result = None

                if result is not None:
                    actions.move_cursor(result.pointer)
                    if actions.exit_requested:
                        engine.stop()
                        break

                    disp = frame.copy() if show_video else np.zeros_like(frame)
                    c_time = time.time()
                    fps = 1 / (c_time - p_time) if p_time != 0 else 0
                    p_time = c_time
                    hud.render(disp, result, fps=fps, show_video=show_video)
                    cv2.imshow("Hand Control", disp)

            # Keys are polled on every pass so a stalled camera can still be quit.
            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                logger.info("Quit command received")
                break
            if key == ord('v'):
                show_video = not show_video
                logger.info(f"Video feed {'enabled' if show_video else 'disabled'}")
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    finally:
        engine.stop()
        source.release()
        detector.close()
        cv2.destroyAllWindows()
        logger.info(f"Processed {frame_count} frames ({skipped} skipped)")
    return 0
