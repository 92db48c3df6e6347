"""
Logging Configuration
Routes the chart pipeline and the figure builder through one set of handlers.
"""
import logging
import sys
from typing import Optional

# The domain library and the figure builder log under separate roots
LOGGER_NAMESPACES = ("vaxpace", "pace_charts")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures every logger in LOGGER_NAMESPACES at the same level.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    for name in LOGGER_NAMESPACES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Calling setup again replaces the handlers instead of stacking them
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)

    logging.getLogger(LOGGER_NAMESPACES[0]).debug(f"Logging initialized for {', '.join(LOGGER_NAMESPACES)}.")
