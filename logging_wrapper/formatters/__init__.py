"""
Log formatters module

Line formats for backends that write LogEntry records.
"""

from typing import Optional

from logging_wrapper.formatters.base_formatter import BaseFormatter
from logging_wrapper.formatters.text_formatter import TextFormatter
from logging_wrapper.formatters.json_formatter import JSONFormatter

FORMATTERS = {
    "text": TextFormatter,
    "json": JSONFormatter,
}


def create_formatter(kind: str, template: Optional[str] = None) -> BaseFormatter:
    """
    Create a formatter by name.

    Args:
        kind: "text" or "json" (case-insensitive)
        template: Template for the text formatter

    Raises:
        ValueError: If kind names no formatter or the template is invalid
    """
    key = kind.strip().lower()
    if key == "text":
        return TextFormatter(template)
    if key == "json":
        return JSONFormatter()
    raise ValueError(f"Unknown formatter '{kind}', expected one of {sorted(FORMATTERS)}")


__all__ = [
    "BaseFormatter",
    "TextFormatter",
    "JSONFormatter",
    "FORMATTERS",
    "create_formatter",
]
