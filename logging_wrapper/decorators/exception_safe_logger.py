"""
Exception-safe logger

Guarantees that no exception escapes a log call.
"""

import traceback
from typing import Any, Optional, Tuple

from logging_wrapper.core import config_helper
from logging_wrapper.core.level import Level
from logging_wrapper.core.logger import Logger
from logging_wrapper.core.named_message import NamedMessage
from logging_wrapper.decorators.base_decorator import LoggerDecorator


def describe_exception(error: BaseException) -> str:
    """Type, message and traceback of error as one string."""
    return "".join(traceback.format_exception(type(error), error, error.__traceback__)).rstrip()


class ExceptionSafeLogger(LoggerDecorator):
    """
    Never-throw boundary around a logger.

    Any exception raised by the underlying logger is caught and its
    description is recorded through the exception logger at that logger's
    default level. If recording fails too, the second failure is dropped.
    The exception logger may be the underlying logger itself.

    Example:
        safe = ExceptionSafeLogger(remote_logger, file_logger)
        safe.info("never raises")
    """

    def __init__(self, underlying_logger: Logger, exception_logger: Logger):
        """
        Initialize exception-safe logger.

        Args:
            underlying_logger: Logger being protected
            exception_logger: Logger recording the protected logger's failures

        Raises:
            ArgumentError: If either logger is None
        """
        super().__init__(underlying_logger)
        config_helper.validate_not_none(exception_logger, "exception_logger")
        self._exception_logger = exception_logger

    @property
    def exception_logger(self) -> Logger:
        return self._exception_logger

    def _log_exception(self, error: Exception) -> None:
        try:
            # the description goes in as a param so braces in it are not parsed
            self._exception_logger.log_default("{0}", describe_exception(error))
        except Exception:
            pass

    def log(self, level: Level, message: str, *params: Any) -> None:
        try:
            self._underlying.log(level, message, *params)
        except Exception as e:
            self._log_exception(e)

    def log_default(self, message: str, *params: Any) -> None:
        try:
            self._underlying.log_default(message, *params)
        except Exception as e:
            self._log_exception(e)

    def log_named_message(
        self, identifier: str, *params: Any, level: Optional[Level] = None
    ) -> None:
        try:
            self._underlying.log_named_message(identifier, *params, level=level)
        except Exception as e:
            self._log_exception(e)

    def _log_named_message(
        self, level: Level, message: NamedMessage, params: Tuple[Any, ...]
    ) -> None:
        try:
            self._underlying._log_named_message(level, message, params)
        except Exception as e:
            self._log_exception(e)

    def is_level_enabled(self, level: Level) -> bool:
        try:
            return self._underlying.is_level_enabled(level)
        except Exception as e:
            self._log_exception(e)
            return False

    def dispose(self) -> None:
        try:
            self._underlying.dispose()
        except Exception as e:
            self._log_exception(e)

        if self._exception_logger is not self._underlying:
            try:
                self._exception_logger.dispose()
            except Exception:
                pass

    def __repr__(self) -> str:
        """String representation."""
        if self._exception_logger is self._underlying:
            return f"ExceptionSafeLogger({self._underlying!r}, exception_logger=self)"
        return f"ExceptionSafeLogger({self._underlying!r}, exception_logger={self._exception_logger!r})"
