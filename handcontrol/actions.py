import logging

logger = logging.getLogger(__name__)

# Names the engine may dispatch; each is a method on an Actions implementation.
EDGE_ACTIONS = ("click", "exit", "toggle_theme", "confetti", "breathing_sequence")


class LoggingActions:
    """Default action handlers: record each dispatch in the log and do nothing else."""

    def click(self, x, y):
        logger.info(f"click at ({x:.0f}, {y:.0f})")

    def exit(self):
        logger.info("exit requested")

    def toggle_theme(self):
        logger.info("toggle theme")

    def confetti(self):
        logger.info("confetti")

    def breathing_sequence(self):
        logger.info("breathing sequence")

    def scroll(self, velocity):
        logger.debug(f"scroll velocity {velocity:.2f}")
