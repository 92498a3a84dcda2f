"""Backends module - Loggers writing to a concrete sink

Importing this module registers every backend in the default registry.
"""

from logging_wrapper.backends.entry_logger import EntryLogger
from logging_wrapper.backends.memory_logger import MemoryLogger
from logging_wrapper.backends.console_logger import ConsoleLogger
from logging_wrapper.backends.file_logger import FileLogger
from logging_wrapper.backends.stdlib_logger import StdlibLogger
from logging_wrapper.backends.logging_service import (
    LoggingService,
    TCPLoggingService,
    UDPLoggingService,
)
from logging_wrapper.backends.remote_logger import RemoteLogger

__all__ = [
    "EntryLogger",
    "MemoryLogger",
    "ConsoleLogger",
    "FileLogger",
    "StdlibLogger",
    "LoggingService",
    "TCPLoggingService",
    "UDPLoggingService",
    "RemoteLogger",
]
