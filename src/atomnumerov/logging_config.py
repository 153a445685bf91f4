"""统一日志配置
================

为包内各模块提供一致的日志器。各模块以

    from .logging_config import get_logger
    logger = get_logger(__name__)

获取日志器。处理器只挂在 ``atomnumerov`` 包日志器上，不改动根日志器；
默认只挂 ``NullHandler``，记录经传播交给应用方配置的处理器。

需要包自带的控制台输出时，设置环境变量（级别默认 WARNING）::

    export ATOMNUMEROV_LOG_LEVEL=DEBUG

或在代码中调用 :func:`set_log_level`。
"""

from __future__ import annotations

import logging
import os
import sys

from .constants import LOG_LEVEL_ENV

__all__ = ["get_logger", "set_log_level"]

PACKAGE_LOGGER = "atomnumerov"

_DEFAULT_FORMAT = "%(asctime)s | %(name)-25s | %(levelname)-8s | %(message)s"
_DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_DEFAULT_LEVEL = logging.WARNING

_loggers: dict[str, logging.Logger] = {}
_handler_configured = False


def _add_console_handler(package_logger: logging.Logger, level: int) -> None:
    """为包日志器挂上控制台处理器（已有则不重复添加）。"""
    for handler in package_logger.handlers:
        if isinstance(handler, logging.StreamHandler):
            return
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT, datefmt=_DEFAULT_DATE_FORMAT))
    package_logger.addHandler(handler)


def _configure_package_handler() -> None:
    """首次调用 :func:`get_logger` 时配置一次包日志器。

    未设置环境变量时只挂 :class:`logging.NullHandler`，输出交给应用方的日志配置；
    设置了环境变量则按该级别输出到标准错误。
    """
    global _handler_configured

    if _handler_configured:
        return

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    env_level = os.environ.get(LOG_LEVEL_ENV, "").upper()
    level = logging.getLevelName(env_level) if env_level else None

    if isinstance(level, int):
        package_logger.setLevel(level)
        _add_console_handler(package_logger, level)
    else:
        package_logger.setLevel(_DEFAULT_LEVEL)
        if not package_logger.handlers:
            package_logger.addHandler(logging.NullHandler())

    _handler_configured = True


def get_logger(name: str) -> logging.Logger:
    """返回指定模块名的日志器（带缓存）。

    Parameters
    ----------
    name : str
        模块名，通常传入 ``__name__``。

    Returns
    -------
    logging.Logger
        已配置的日志器。
    """
    if name not in _loggers:
        _configure_package_handler()
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


def set_log_level(level: int) -> None:
    """设置包日志器级别，并确保有控制台处理器输出。

    Parameters
    ----------
    level : int
        日志级别，例如 ``logging.DEBUG``。
    """
    _configure_package_handler()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    _add_console_handler(package_logger, level)
    for handler in package_logger.handlers:
        handler.setLevel(level)
