"""Logging setup."""

import logging

from library_catalog.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger.

    Args:
        level: Log level name. Defaults to the configured ``log_level``.
    """
    if level is None:
        level = get_settings().log_level

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # SQL echo is controlled by database_echo, keep the engine logger quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
