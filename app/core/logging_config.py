# /app/core/logging_config.py

import logging

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Configures the root logger once, at application startup."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # SQLAlchemy's engine logger is very chatty at INFO.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
