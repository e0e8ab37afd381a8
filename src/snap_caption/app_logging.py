"""Logging configuration for the SnapCaption service."""

import logging

LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"

# httpx logs every request URL at INFO; signed Storage URLs carry tokens.
QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the ``snap_caption`` logger tree.

    Safe to call once per app instance; later calls only update the level.
    """
    logger = logging.getLogger("snap_caption")
    logger.setLevel(level.upper())
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
