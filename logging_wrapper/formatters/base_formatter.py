"""Formatter interface for entry-writing backends"""

from abc import ABC, abstractmethod

from logging_wrapper.core.log_entry import LogEntry


class BaseFormatter(ABC):
    """Turns a LogEntry into the single line a backend writes."""

    @abstractmethod
    def format(self, entry: LogEntry) -> str:
        """Render entry without a trailing newline."""

    def __call__(self, entry: LogEntry) -> str:
        return self.format(entry)
