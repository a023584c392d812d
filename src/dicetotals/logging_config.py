"""
Logging Configuration
Sets up the 'dicetotals' logger used by the model and the session.

Levels in use:
    DEBUG: every record write of the ProfileStore and every debounced
        modifier commit.
    INFO: profile lifecycle (created, renamed, deleted, loaded) and refused
        actions (removing a favorite, deleting the last profile).
    WARNING: stored data that could not be parsed (a replaced record, dropped
        modifiers).
    ERROR: modifier edits that could not be saved when the window closed.
"""
import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the logger for the 'dicetotals' namespace.

    Args:
        level: Logging level (logging.DEBUG also shows store writes)
        log_file: Optional path to save logs to a file.
    """
    logger = logging.getLogger("dicetotals")
    logger.setLevel(level)

    # Calling main() twice in one process must not double every line
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
