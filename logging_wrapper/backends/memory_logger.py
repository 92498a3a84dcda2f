"""In-memory backend"""

from collections import deque
from typing import Deque, List

from logging_wrapper.core import config_helper
from logging_wrapper.core.configuration import Configuration
from logging_wrapper.core.exceptions import ConfigError
from logging_wrapper.core.log_entry import LogEntry
from logging_wrapper.core.registry import register_backend
from logging_wrapper.backends.entry_logger import EntryLogger

CAPACITY = "capacity"


@register_backend("memory", "logging_wrapper.backends.MemoryLogger")
class MemoryLogger(EntryLogger):
    """
    Keep log entries in memory.

    Useful for tests and for inspecting what an application logged.
    With a capacity, only the most recent entries are kept.

    Configuration attributes:
        capacity: Maximum number of entries kept (optional, unbounded)
        min_level: Lowest enabled level (optional, DEBUG)
    """

    def __init__(self, configuration: Configuration):
        super().__init__(configuration)
        capacity = config_helper.get_int_attribute(configuration, CAPACITY, None)
        if capacity is not None and capacity <= 0:
            raise ConfigError(f"'{CAPACITY}' must be positive, got {capacity}")
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self):
        return self._entries.maxlen

    @property
    def entries(self) -> List[LogEntry]:
        """Copy of the recorded entries, oldest first."""
        with self._lock:
            return list(self._entries)

    @property
    def messages(self) -> List[str]:
        """Recorded message texts, oldest first."""
        return [entry.message for entry in self.entries]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _write(self, entry: LogEntry) -> None:
        self._entries.append(entry)
