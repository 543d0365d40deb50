"""Logging setup for CLI"""

import logging

import settings


def setup_logging(debug: bool) -> None:
    """
    Configure the root logger for a CLI run

    Args:
        debug: Whether debug mode is enabled (overrides LOG_LEVEL)
    """
    root_logger = logging.getLogger()
    level = logging.DEBUG if debug else getattr(logging, str(settings.LOG_LEVEL).upper(), logging.WARNING)
    root_logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root_logger.addHandler(console_handler)

    # httpx logs every request at INFO
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)
