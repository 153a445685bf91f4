import logging

import pytest

from atomnumerov import logging_config
from atomnumerov.constants import LOG_LEVEL_ENV


@pytest.fixture
def fresh_package_logger(monkeypatch):
    """清空包日志器的处理器与配置标记，测试后恢复。"""
    pkg = logging.getLogger(logging_config.PACKAGE_LOGGER)
    saved_handlers = list(pkg.handlers)
    saved_level = pkg.level
    for handler in saved_handlers:
        pkg.removeHandler(handler)
    monkeypatch.setattr(logging_config, "_handler_configured", False)
    yield pkg
    for handler in list(pkg.handlers):
        pkg.removeHandler(handler)
    for handler in saved_handlers:
        pkg.addHandler(handler)
    pkg.setLevel(saved_level)


def _console_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]


@pytest.mark.quick
def test_default_configuration_is_silent(monkeypatch, fresh_package_logger):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    logging_config._configure_package_handler()

    pkg = fresh_package_logger
    assert pkg.level == logging.WARNING
    assert pkg.handlers
    assert all(isinstance(h, logging.NullHandler) for h in pkg.handlers)


@pytest.mark.quick
def test_env_level_enables_console_output(monkeypatch, fresh_package_logger):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    logging_config._configure_package_handler()

    pkg = fresh_package_logger
    assert pkg.level == logging.DEBUG
    assert len(_console_handlers(pkg)) == 1


@pytest.mark.quick
def test_unknown_env_level_falls_back_to_warning(monkeypatch, fresh_package_logger):
    monkeypatch.setenv(LOG_LEVEL_ENV, "chatty")
    logging_config._configure_package_handler()

    pkg = fresh_package_logger
    assert pkg.level == logging.WARNING
    assert not _console_handlers(pkg)


@pytest.mark.quick
def test_set_log_level_adds_single_console_handler(monkeypatch, fresh_package_logger):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    logging_config.set_log_level(logging.INFO)
    logging_config.set_log_level(logging.DEBUG)

    pkg = fresh_package_logger
    assert pkg.level == logging.DEBUG
    handlers = _console_handlers(pkg)
    assert len(handlers) == 1
    assert handlers[0].level == logging.DEBUG


@pytest.mark.quick
def test_module_loggers_live_under_package():
    logger = logging_config.get_logger("atomnumerov.numerov")
    assert logger is logging_config.get_logger("atomnumerov.numerov")
    assert logger.name.startswith(logging_config.PACKAGE_LOGGER + ".")
