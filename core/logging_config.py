# core/logging_config.py
import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME = "nefer.admin_setup"


def setup_logger(level: str = None) -> logging.Logger:
    """
    Logger shared by the setup job and its services.
    LOG_LEVEL (env) overrides the default INFO, e.g. LOG_LEVEL=DEBUG.
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Configure once, even if imported from several entry points
    if logger.handlers:
        return logger

    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logger.setLevel(getattr(logging, level, logging.INFO))

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(stream_handler)

    return logger


logger = setup_logger()
