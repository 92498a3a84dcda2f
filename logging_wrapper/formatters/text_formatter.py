"""
Template-based text formatter
"""

from string import Formatter
from typing import FrozenSet, Optional

from logging_wrapper.core.log_entry import LogEntry
from logging_wrapper.formatters.base_formatter import BaseFormatter


class TextFormatter(BaseFormatter):
    """
    Format log entries with a str.format template.

    Placeholders:
        {timestamp}: Time with milliseconds
        {level}: Level name, e.g. {level:12} for a padded column
        {logger}: Logger name
        {thread}: Thread name
        {message}: Rendered message
        {named_message}: Named message name (empty for plain calls)
        {parameters}: Named message parameters as name=value pairs

    When a template uses neither named-message placeholder, named messages
    get " [name key=value ...]" appended so the line still identifies them.

    Example:
        formatter = TextFormatter("{level} {message}")
    """

    DEFAULT_TEMPLATE = "[{timestamp}] [{level:12}] [{logger}] [{thread}] {message}"
    PLACEHOLDERS = frozenset(
        ("timestamp", "level", "logger", "thread", "message", "named_message", "parameters")
    )
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

    def __init__(self, template: Optional[str] = None):
        """
        Raises:
            ValueError: If the template is malformed or uses an unknown placeholder
        """
        self.template = template or self.DEFAULT_TEMPLATE
        self.fields = self._parse_fields(self.template)
        unknown = self.fields - self.PLACEHOLDERS
        if unknown:
            raise ValueError(
                f"Unknown placeholder(s) {sorted(unknown)} in template '{self.template}'"
            )
        self.appends_named = not (self.fields & {"named_message", "parameters"})

    @staticmethod
    def _parse_fields(template: str) -> FrozenSet[str]:
        return frozenset(
            name for _, name, _, _ in Formatter().parse(template) if name is not None
        )

    def format(self, entry: LogEntry) -> str:
        parameters = entry.describe_parameters()
        line = self.template.format(
            timestamp=entry.timestamp.strftime(self.TIMESTAMP_FORMAT)[:-3],
            level=entry.level.name,
            logger=entry.logger_name,
            thread=entry.thread_name,
            message=entry.message,
            named_message=entry.named_message or "",
            parameters=parameters,
        )
        if entry.is_named and self.appends_named:
            suffix = f"{entry.named_message} {parameters}".rstrip()
            line = f"{line} [{suffix}]"
        return line

    def __repr__(self) -> str:
        return f"TextFormatter(template='{self.template}')"
