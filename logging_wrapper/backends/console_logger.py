"""Console backend with ANSI colors"""

import sys
from typing import Optional, TextIO

from logging_wrapper.core import config_helper
from logging_wrapper.core.configuration import Configuration
from logging_wrapper.core.exceptions import ConfigError
from logging_wrapper.core.level import ZeroConfigurationOption
from logging_wrapper.core.log_entry import LogEntry
from logging_wrapper.core.registry import register_backend
from logging_wrapper.backends.entry_logger import MIN_LEVEL, EntryLogger, load_formatter
from logging_wrapper.formatters import TextFormatter

STREAM = "stream"
COLORED = "colored"

STREAMS = ("stderr", "stdout")


@register_backend("console", "logging_wrapper.backends.ConsoleLogger")
class ConsoleLogger(EntryLogger):
    """
    Write log entries to the console.

    Configuration attributes:
        stream: "stderr" (default) or "stdout"
        colored: Wrap text lines in ANSI color codes (default false)
        format: "text" (default) or "json"
        template: TextFormatter template
        min_level: Lowest enabled level (optional, DEBUG)
    """

    def __init__(self, configuration: Configuration, stream: Optional[TextIO] = None):
        """
        Initialize console logger.

        Args:
            configuration: Logger configuration
            stream: Output stream overriding the stream attribute
        """
        super().__init__(configuration)
        stream_name = config_helper.get_string_attribute(configuration, STREAM, False) or "stderr"
        if stream_name.lower() not in STREAMS:
            raise ConfigError(f"Invalid value '{stream_name}' of attribute '{STREAM}'")
        self.stream = stream or getattr(sys, stream_name.lower())
        self.colored = config_helper.get_boolean_attribute(configuration, COLORED, False)
        self.formatter = load_formatter(configuration)

    @classmethod
    def initialize_zero_configuration(
        cls, option: ZeroConfigurationOption, configuration: Configuration
    ) -> Configuration:
        """Colored output for Test and ClientDebug, preset threshold for the rest."""
        config_helper.validate_not_none(configuration, "configuration")
        threshold = option.threshold
        return configuration.with_defaults({
            STREAM: "stderr",
            COLORED: option in (ZeroConfigurationOption.TEST, ZeroConfigurationOption.CLIENT_DEBUG),
            MIN_LEVEL: threshold.name if threshold else None,
        })

    def _write(self, entry: LogEntry) -> None:
        msg = self.formatter.format(entry)

        if self.colored and isinstance(self.formatter, TextFormatter):
            msg = f"{entry.level.color_code}{msg}{entry.level.reset_code}"

        self.stream.write(msg + "\n")
        self.stream.flush()

    def _close(self) -> None:
        self.stream.flush()
