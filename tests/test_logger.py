import logging

from vizharness.utils.logger import set_level, setup_logger


def test_setup_logger_adds_one_handler():
    first = setup_logger("vizharness.tests.single")
    second = setup_logger("vizharness.tests.single")

    assert first is second
    assert len(first.handlers) == 1
    assert first.propagate


def test_setup_logger_level_from_environment(monkeypatch):
    monkeypatch.setenv("VIZHARNESS_LOG_LEVEL", "debug")

    assert setup_logger("vizharness.tests.env").level == logging.DEBUG


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("VIZHARNESS_LOG_LEVEL", "DEBUG")

    assert setup_logger("vizharness.tests.explicit", "ERROR").level == logging.ERROR


def test_set_level_applies_to_namespace():
    logger = setup_logger("vizharness.tests.namespace", "WARNING")

    try:
        set_level("INFO")
        assert logger.level == logging.INFO
    finally:
        set_level("WARNING")
