import logging

import pytest

from build_size_tracker.logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("build_size_tracker").setLevel(logging.NOTSET)


def test_verbose_enables_debug():
    setup_logging(verbose=True)

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("build_size_tracker").level == logging.DEBUG


def test_quiet_wins_over_level():
    setup_logging(level="INFO", quiet=True)

    assert logging.getLogger().level == logging.ERROR


def test_invalid_level_is_rejected():
    with pytest.raises(ValueError, match="Invalid log level"):
        setup_logging(level="LOUD")


def test_single_handler_after_repeated_setup():
    setup_logging()
    setup_logging(format_style="detailed")

    assert len(logging.getLogger().handlers) == 1


def test_get_logger_is_namespaced():
    assert get_logger("cli").name == "build_size_tracker.cli"
