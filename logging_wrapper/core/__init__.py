"""
Core module for the logging wrapper

This module contains the fundamental classes:
- Logger: Logger contract and ConfiguredLogger shared implementation
- Level / ZeroConfigurationOption: Level and preset enumerations
- NamedMessage: Reusable message template
- Configuration: Immutable configuration section
- BackendRegistry: Backend identifiers and factories
- LogManager: Construction pipeline
"""

from logging_wrapper.core.exceptions import (
    ArgumentError,
    ConfigError,
    LoggingError,
    LoggingWrapperError,
    MessageFormattingError,
    UnknownNamedMessageError,
)
from logging_wrapper.core.level import Level, ZeroConfigurationOption
from logging_wrapper.core.named_message import NamedMessage
from logging_wrapper.core.configuration import Configuration
from logging_wrapper.core.log_entry import LogEntry
from logging_wrapper.core.logger import ConfiguredLogger, Logger
from logging_wrapper.core.registry import BackendRegistry, default_registry, register_backend
from logging_wrapper.core.log_manager import DEFAULT_SECTION, LogManager, create_logger

__all__ = [
    "ArgumentError",
    "ConfigError",
    "LoggingError",
    "LoggingWrapperError",
    "MessageFormattingError",
    "UnknownNamedMessageError",
    "Level",
    "ZeroConfigurationOption",
    "NamedMessage",
    "Configuration",
    "LogEntry",
    "Logger",
    "ConfiguredLogger",
    "BackendRegistry",
    "default_registry",
    "register_backend",
    "DEFAULT_SECTION",
    "LogManager",
    "create_logger",
]
