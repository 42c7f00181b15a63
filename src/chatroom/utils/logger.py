import logging

from chatroom import config

FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_created = []


def get_logger(name):
    logger = logging.getLogger(name)
    if not logger.handlers:
        level = getattr(logging, config.LOG_LEVEL, logging.DEBUG)
        logger.setLevel(level)
        formatter = logging.Formatter(FORMAT)

        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(formatter)
        logger.addHandler(ch)

        # Log file is opt-in (CHAT_LOG_FILE)
        if config.LOG_FILE:
            fh = logging.FileHandler(config.LOG_FILE)
            fh.setLevel(level)
            fh.setFormatter(formatter)
            logger.addHandler(fh)
        _created.append(logger)
    return logger


def set_level(level):
    """Change the level of every logger handed out by get_logger."""
    level = getattr(logging, str(level).upper(), logging.DEBUG)
    for logger in _created:
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
