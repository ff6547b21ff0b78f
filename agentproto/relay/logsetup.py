from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGGER_NAME = "agentproto"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_OWNED = "_agentproto_handler"


def set_log_level(level: int | str) -> None:
    logging.getLogger(LOGGER_NAME).setLevel(level)


def set_log_file(log_file: Path | str | None) -> None:
    """Send agentproto logs to ``log_file``, or to stderr when it is None.

    The current handler stays attached if the new one cannot be opened.
    """
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _OWNED, True)

    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        if getattr(h, _OWNED, False):
            logger.removeHandler(h)
            h.close()
    logger.addHandler(handler)


def configure_logging(level: int | str = "INFO", log_file: Path | str | None = None) -> logging.Logger:
    set_log_level(level)
    set_log_file(log_file)
    return logging.getLogger(LOGGER_NAME)
