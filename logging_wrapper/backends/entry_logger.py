"""
Base for backends that write LogEntry records to one local resource
"""

from __future__ import annotations

import threading
from abc import abstractmethod
from typing import Any, Tuple

from logging_wrapper.core import config_helper
from logging_wrapper.core.configuration import Configuration
from logging_wrapper.core.exceptions import ConfigError, LoggingError
from logging_wrapper.core.level import Level
from logging_wrapper.core.log_entry import LogEntry
from logging_wrapper.core.logger import ConfiguredLogger
from logging_wrapper.core.named_message import NamedMessage
from logging_wrapper.formatters import BaseFormatter, create_formatter

MIN_LEVEL = "min_level"
FORMAT = "format"
TEMPLATE = "template"


def load_formatter(configuration: Configuration) -> BaseFormatter:
    """
    Create the formatter named by the format and template attributes.

    Raises:
        ConfigError: If format names no formatter or template is invalid
    """
    kind = config_helper.get_string_attribute(configuration, FORMAT, False) or "text"
    template = config_helper.get_string_attribute(configuration, TEMPLATE, False)
    try:
        return create_formatter(kind, template)
    except ValueError as e:
        raise ConfigError(f"Invalid formatter configuration: {e}") from e


class EntryLogger(ConfiguredLogger):
    """
    Backend writing one LogEntry per call.

    Levels below min_level (default DEBUG) are disabled; a min_level of OFF
    disables everything. Writes are serialized with a lock held only for the
    duration of the write. Logging after dispose() raises LoggingError.

    Named messages are recorded with their name and their parameters keyed
    by declared name.
    """

    def __init__(self, configuration: Configuration):
        super().__init__(configuration)
        self._min_level = config_helper.get_level_attribute(configuration, MIN_LEVEL, Level.DEBUG)
        self._lock = threading.Lock()
        self._closed = False

    @property
    def min_level(self) -> Level:
        return self._min_level

    @property
    def closed(self) -> bool:
        return self._closed

    def is_level_enabled(self, level: Level) -> bool:
        if self._min_level == Level.OFF or level == Level.OFF:
            return False
        return level >= self._min_level

    def log(self, level: Level, message: str, *params: Any) -> None:
        text = self._render(level, message, params)
        if text is None:
            return
        self._emit(LogEntry(level=level, message=text, logger_name=self.log_name))

    def _log_named_message(
        self, level: Level, message: NamedMessage, params: Tuple[Any, ...]
    ) -> None:
        text = self._render(level, message.text, params)
        if text is None:
            return
        self._emit(LogEntry(
            level=level,
            message=text,
            logger_name=self.log_name,
            named_message=message.name,
            parameters=dict(zip(message.parameter_names, params)),
        ))

    def _emit(self, entry: LogEntry) -> None:
        try:
            with self._lock:
                if self._closed:
                    raise LoggingError(f"Logger '{self.log_name}' is disposed")
                self._write(entry)
        except LoggingError:
            raise
        except Exception as e:
            raise LoggingError(f"Error occurs when logging to '{self.log_name}'") from e

    @abstractmethod
    def _write(self, entry: LogEntry) -> None:
        """Write entry to the resource (caller holds the lock)."""

    def _close(self) -> None:
        """Release the resource (caller holds the lock)."""

    def dispose(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            try:
                self._close()
            except Exception:
                pass
