"""
Logger contract

Logger is the capability set every backend and decorator implements.
ConfiguredLogger is the optional shared implementation backends build on:
identity and named messages read from a Configuration, plus the rendering
step that turns a template and params into the final message.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from logging_wrapper.core import config_helper
from logging_wrapper.core.configuration import Configuration
from logging_wrapper.core.exceptions import ArgumentError, ConfigError, UnknownNamedMessageError
from logging_wrapper.core.level import Level, ZeroConfigurationOption
from logging_wrapper.core.message_format import format_message
from logging_wrapper.core.named_message import NamedMessage

LOGGER_NAME = "logger_name"
DEFAULT_LEVEL = "default_level"
NAMED_MESSAGES = "NamedMessages"
TEXT = "text"
PARAMETERS = "parameters"

DEFAULT_LEVEL_VALUE = Level.DEBUG


class Logger(ABC):
    """
    Abstract logger.

    Thread Safety:
        log() and is_level_enabled() may be called from any thread.
    """

    @property
    @abstractmethod
    def log_name(self) -> str:
        """Identity of the logger (destination or category)."""

    @property
    @abstractmethod
    def default_level(self) -> Level:
        """Level used when a call gives none."""

    @property
    @abstractmethod
    def named_messages(self) -> Mapping[str, NamedMessage]:
        """Read-only mapping of identifier to NamedMessage."""

    @abstractmethod
    def log(self, level: Level, message: str, *params: Any) -> None:
        """
        Format message with params and record it at level.

        Does nothing if level is Level.OFF or not enabled.

        Args:
            level: Severity of the message
            message: Template with positional placeholders
            *params: Values for the placeholders

        Raises:
            ArgumentError: If message is None
            MessageFormattingError: If placeholders and params do not match
            LoggingError: If the sink cannot record the message
        """

    @abstractmethod
    def is_level_enabled(self, level: Level) -> bool:
        """Whether the logger acts on messages of the given level."""

    @abstractmethod
    def dispose(self) -> None:
        """
        Release backend resources.

        Safe to call more than once. Cleanup failures are swallowed.
        """

    def log_default(self, message: str, *params: Any) -> None:
        """Log message at the default level."""
        self.log(self.default_level, message, *params)

    def log_named_message(
        self, identifier: str, *params: Any, level: Optional[Level] = None
    ) -> None:
        """
        Log a registered named message.

        Args:
            identifier: Name the message is registered under
            *params: Values for the message's placeholders
            level: Level to log at; defaults to the message's own level

        Raises:
            ArgumentError: If identifier is None or empty
            UnknownNamedMessageError: If no message has that identifier
        """
        message = self.find_named_message(identifier)
        if level is None:
            level = message.default_level
        self._log_named_message(level, message, params)

    def find_named_message(self, identifier: str) -> NamedMessage:
        """
        Look up a named message.

        Raises:
            ArgumentError: If identifier is None or empty
            UnknownNamedMessageError: If no message has that identifier
        """
        config_helper.validate_not_empty_string(identifier, "identifier")
        try:
            return self.named_messages[identifier]
        except KeyError:
            raise UnknownNamedMessageError(identifier) from None

    def _log_named_message(
        self, level: Level, message: NamedMessage, params: Tuple[Any, ...]
    ) -> None:
        """
        Record a named message.

        Renders the text exactly like log(). Backends that can pass
        parameters to their sink natively override this step.
        """
        self.log(level, message.text, *params)

    def debug(self, message: str, *params: Any) -> None:
        """Log debug message."""
        self.log(Level.DEBUG, message, *params)

    def info(self, message: str, *params: Any) -> None:
        """Log info message."""
        self.log(Level.INFO, message, *params)

    def warn(self, message: str, *params: Any) -> None:
        """Log warning message."""
        self.log(Level.WARN, message, *params)

    def error(self, message: str, *params: Any) -> None:
        """Log error message."""
        self.log(Level.ERROR, message, *params)

    def fatal(self, message: str, *params: Any) -> None:
        """Log fatal message."""
        self.log(Level.FATAL, message, *params)

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()


def load_named_messages(
    configuration: Configuration, default_level: Level
) -> Dict[str, NamedMessage]:
    """
    Build named messages from the NamedMessages child section.

    Each child section is one message; its name is the identifier.

    Args:
        configuration: Logger configuration
        default_level: Level for messages that declare none

    Returns:
        Mapping of identifier to NamedMessage (empty if the section is absent)

    Raises:
        ConfigError: If a message lacks text or has invalid attributes
    """
    section = configuration.get_child(NAMED_MESSAGES)
    messages: Dict[str, NamedMessage] = {}
    if section is None:
        return messages

    for child in section.children:
        text = config_helper.get_string_attribute(child, TEXT, True)
        level = config_helper.get_level_attribute(child, DEFAULT_LEVEL, default_level)
        parameters = config_helper.get_string_list_attribute(child, PARAMETERS, False)
        try:
            messages[child.name] = NamedMessage(child.name, text, tuple(parameters), level)
        except ArgumentError as e:
            raise ConfigError(f"Invalid named message '{child.name}'") from e
    return messages


class ConfiguredLogger(Logger):
    """
    Shared implementation for backends constructed from a Configuration.

    Reads logger_name (required), default_level (optional, DEBUG) and the
    NamedMessages child section. Subclasses implement log(),
    is_level_enabled() and dispose(), using _render() for the common
    validation and formatting.
    """

    def __init__(self, configuration: Configuration):
        """
        Initialize logger identity from configuration.

        Raises:
            ArgumentError: If configuration is None
            ConfigError: If logger_name is missing or an attribute is invalid
        """
        config_helper.validate_not_none(configuration, "configuration")
        self._log_name = config_helper.get_string_attribute(configuration, LOGGER_NAME, True)
        self._default_level = config_helper.get_level_attribute(
            configuration, DEFAULT_LEVEL, DEFAULT_LEVEL_VALUE
        )
        self._named_messages = MappingProxyType(
            load_named_messages(configuration, self._default_level)
        )

    @property
    def log_name(self) -> str:
        return self._log_name

    @property
    def default_level(self) -> Level:
        return self._default_level

    @property
    def named_messages(self) -> Mapping[str, NamedMessage]:
        return self._named_messages

    @classmethod
    def initialize_zero_configuration(
        cls, option: ZeroConfigurationOption, configuration: Configuration
    ) -> Configuration:
        """
        Derive a configuration with this backend's defaults for a preset.

        The base implementation adds nothing.

        Args:
            option: Preset to apply
            configuration: Explicit configuration, never modified

        Returns:
            Configuration with preset defaults under explicit settings
        """
        config_helper.validate_not_none(configuration, "configuration")
        return configuration

    def _render(self, level: Level, message: str, params: Tuple[Any, ...]) -> Optional[str]:
        """
        Validate a log call and format its message.

        Returns:
            Formatted message, or None if the call must be ignored

        Raises:
            ArgumentError: If message is None
            MessageFormattingError: If placeholders and params do not match
        """
        config_helper.validate_not_none(message, "message")
        if level == Level.OFF or not self.is_level_enabled(level):
            return None
        return format_message(message, params)

    def __repr__(self) -> str:
        """String representation."""
        return f"{type(self).__name__}(name={self._log_name!r}, level={self._default_level})"
