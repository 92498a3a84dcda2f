"""
Base decorator

A Logger wrapping another Logger and reading its identity through.
"""

from typing import Mapping

from logging_wrapper.core import config_helper
from logging_wrapper.core.level import Level
from logging_wrapper.core.logger import Logger
from logging_wrapper.core.named_message import NamedMessage


class LoggerDecorator(Logger):
    """
    Abstract base class for logger decorators.

    Exposes the underlying logger's log_name, default_level and
    named_messages unchanged. The underlying logger is shared, not owned.
    """

    def __init__(self, underlying_logger: Logger):
        """
        Args:
            underlying_logger: Logger receiving forwarded calls

        Raises:
            ArgumentError: If underlying_logger is None
        """
        config_helper.validate_not_none(underlying_logger, "underlying_logger")
        self._underlying = underlying_logger

    @property
    def underlying_logger(self) -> Logger:
        return self._underlying

    @property
    def log_name(self) -> str:
        return self._underlying.log_name

    @property
    def default_level(self) -> Level:
        return self._underlying.default_level

    @property
    def named_messages(self) -> Mapping[str, NamedMessage]:
        return self._underlying.named_messages

    def __repr__(self) -> str:
        """String representation."""
        return f"{type(self).__name__}({self._underlying!r})"
