"""
Exception hierarchy

    LoggingWrapperError
    ├── ConfigError
    ├── LoggingError
    │   └── MessageFormattingError
    └── ArgumentError
        └── UnknownNamedMessageError
"""


class LoggingWrapperError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(LoggingWrapperError):
    """
    Configuration is missing or invalid.

    Raised when a backend cannot be resolved or constructed, or when a
    policy attribute is malformed. Always fatal to the construction in
    progress.
    """


class LoggingError(LoggingWrapperError):
    """A backend rejected or failed to record a log call."""


class MessageFormattingError(LoggingError):
    """Template placeholders and supplied parameters do not match."""


class ArgumentError(LoggingWrapperError, ValueError):
    """The caller violated the contract of an operation."""


class UnknownNamedMessageError(ArgumentError, LookupError):
    """No named message is registered under the requested identifier."""

    def __init__(self, identifier: str):
        super().__init__(f"no message found for message identifier '{identifier}'")
        self.identifier = identifier
