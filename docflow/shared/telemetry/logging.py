"""Process-wide logging for docflow: one stdout stream, stdlib logging throughout."""

import logging
import sys

from docflow.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging() -> None:
    """Install the root handler once at startup.

    DEBUG when settings.debug, else INFO. uvicorn's own access log is
    lowered to WARNING because docflow.access already logs every request
    with its request id. SQL echo goes through the sqlalchemy.engine logger.
    """
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
