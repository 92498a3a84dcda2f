"""
Logger decorators

Loggers that wrap another logger and change its behavior without touching
the sink.
"""

from logging_wrapper.decorators.base_decorator import LoggerDecorator
from logging_wrapper.decorators.level_filtered_logger import LevelFilteredLogger
from logging_wrapper.decorators.exception_safe_logger import ExceptionSafeLogger

__all__ = [
    "LoggerDecorator",
    "LevelFilteredLogger",
    "ExceptionSafeLogger",
]
