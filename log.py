import logging

from config import LOG_FORMAT, DEFAULT_LOG_LEVEL

logger = logging.getLogger('paging_simulator')


def setup_logger(level=DEFAULT_LOG_LEVEL):
    # Only attach the handler once, later calls just change the level
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
