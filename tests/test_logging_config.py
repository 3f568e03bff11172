import logging

import pytest

from rasterkit.core.logging_config import get_logger, set_log_level, setup_logging


@pytest.fixture
def restore_package_logger():
    logger = logging.getLogger("rasterkit")
    saved = (logger.level, list(logger.handlers), logger.propagate)
    yield logger
    for handler in logger.handlers:
        if handler not in saved[1]:
            handler.close()
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]
    logger.propagate = saved[2]


def test_setup_logging_with_file(tmp_path, restore_package_logger):
    log_file = tmp_path / "logs" / "rasterkit.log"
    logger = setup_logging(level="DEBUG", log_file=log_file)
    assert logger is restore_package_logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    assert not logger.propagate

    get_logger("tests").debug("hello")
    for handler in logger.handlers:
        handler.flush()
    assert "hello" in log_file.read_text()


def test_setup_logging_reads_environment(monkeypatch, restore_package_logger):
    monkeypatch.setenv("RASTERKIT_LOG_LEVEL", "ERROR")
    assert setup_logging().level == logging.ERROR


def test_set_log_level(restore_package_logger):
    setup_logging(level=logging.INFO)
    set_log_level("warning")
    assert restore_package_logger.level == logging.WARNING
    assert all(handler.level == logging.WARNING for handler in restore_package_logger.handlers)


def test_get_logger_is_namespaced():
    assert get_logger("io.header_file").name == "rasterkit.io.header_file"
