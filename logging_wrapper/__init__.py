"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

Python Logging Wrapper - A pluggable logging facade
Backends are selected and assembled at runtime from configuration
"""

__version__ = "1.0.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

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
from logging_wrapper.core.logger import ConfiguredLogger, Logger
from logging_wrapper.core.registry import BackendRegistry, register_backend
from logging_wrapper.core.log_manager import LogManager, create_logger

# Import submodules; backends register themselves on import
from logging_wrapper import backends
from logging_wrapper import decorators
from logging_wrapper import formatters

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
    "Logger",
    "ConfiguredLogger",
    "BackendRegistry",
    "register_backend",
    "LogManager",
    "create_logger",
    "backends",
    "decorators",
    "formatters",
]
