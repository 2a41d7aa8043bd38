import logging
import sys


LEVEL_TAGS = {
    logging.INFO: 'INF',
    logging.ERROR: 'ERR',
}


class TagFormatter(logging.Formatter):
    """Formats records as ``metadata [INF] message``."""

    def format(self, record):
        record.tag = LEVEL_TAGS.get(record.levelno, record.levelname)
        return super().format(record)


def configure_logging(level=logging.INFO, stream=None):
    logger = logging.getLogger('fetch_metadata')
    logger.setLevel(level)
    for handler in logger.handlers:
        if isinstance(handler.formatter, TagFormatter):
            return logger

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(TagFormatter('metadata [%(tag)s] %(message)s'))
    logger.addHandler(handler)
    return logger
