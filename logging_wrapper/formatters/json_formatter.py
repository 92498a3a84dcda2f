"""
JSON lines formatter

Each entry becomes one JSON object. Named messages carry their name and
their parameters keyed by declared name, so collectors can index them
without parsing the message text.
"""

import json

from logging_wrapper.core.log_entry import LogEntry
from logging_wrapper.formatters.base_formatter import BaseFormatter


class JSONFormatter(BaseFormatter):
    """
    Format log entries as compact JSON objects.

    Parameter values that are not JSON types are written with str().
    """

    def __init__(self, include_thread: bool = True):
        self.include_thread = include_thread

    def format(self, entry: LogEntry) -> str:
        return json.dumps(
            entry.to_dict(include_thread=self.include_thread),
            ensure_ascii=False,
            default=str,
        )

    def __repr__(self) -> str:
        return f"JSONFormatter(include_thread={self.include_thread})"
