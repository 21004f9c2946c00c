"""Logging setup for the parking lot package."""

import logging

PACKAGE_LOGGER = "parking_lot"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_level(level: str | int) -> int:
    """Turn a level name such as ``"debug"`` or a numeric level into an int."""
    if isinstance(level, int):
        return level
    levels = logging.getLevelNamesMapping()
    name = level.strip().upper()
    if name not in levels:
        raise ValueError(f"Unknown log level: {level!r}")
    return levels[name]


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Route package logs to stderr at the given level.

    Repeated calls only adjust the level; the stream handler is added once.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolve_level(level))
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
