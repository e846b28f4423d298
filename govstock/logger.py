# govstock/logger.py
import logging
import os
import sys

# the groq SDK logs every chat completion request through httpx at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "groq")


def setup_logging(level: str | None = None, stream=None) -> None:
    """Root logger for the API and scripts; level from LOG_LEVEL unless given."""
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-7s %(name)s | %(message)s"))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, level, logging.INFO))
    quiet = logging.NOTSET if level == "DEBUG" else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet)
