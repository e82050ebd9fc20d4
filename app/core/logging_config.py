# /app/core/logging_config.py

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'app' logger hierarchy once. Module loggers created with
    logging.getLogger(__name__) inherit its handler and level.
    """
    if level is None:
        from .config import get_settings
        level = get_settings().log_level

    logger = logging.getLogger("app")
    logger.setLevel(logging.getLevelName(level.upper()))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
