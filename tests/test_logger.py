import logging

from chatroom.utils.logger import get_logger, set_level


def test_handlers_attached_once():
    first = get_logger("LoggerTest")
    count = len(first.handlers)
    second = get_logger("LoggerTest")
    assert first is second
    assert len(second.handlers) == count >= 1


def test_set_level_applies_to_created_loggers():
    logger = get_logger("LoggerLevelTest")
    set_level("warning")
    try:
        assert logger.level == logging.WARNING
        assert all(h.level == logging.WARNING for h in logger.handlers)
    finally:
        set_level("DEBUG")
