"""
Named message data structure

A reusable message template registered under a short identifier.
"""

from dataclasses import dataclass, field
from typing import Tuple

from logging_wrapper.core.exceptions import ArgumentError
from logging_wrapper.core.level import Level
from logging_wrapper.core.message_format import format_message


@dataclass(frozen=True)
class NamedMessage:
    """
    Immutable message template.

    Attributes:
        name: Identifier the message is registered under
        text: Template with positional placeholders ("{0}", "{1}", ...)
        parameter_names: One name per expected placeholder, in order
        default_level: Level used when the caller gives none
    """

    name: str
    text: str
    parameter_names: Tuple[str, ...] = field(default_factory=tuple)
    default_level: Level = Level.DEBUG

    def __post_init__(self):
        """Validate named message after initialization."""
        if not isinstance(self.name, str) or not self.name:
            raise ArgumentError("name must be a non-empty string")
        if not isinstance(self.text, str) or not self.text:
            raise ArgumentError("text must be a non-empty string")
        if self.parameter_names is None:
            raise ArgumentError("parameter_names must not be None")
        if not isinstance(self.default_level, Level):
            raise ArgumentError(f"Invalid default level: {self.default_level!r}")

        names = tuple(self.parameter_names)
        for name in names:
            if name is None:
                raise ArgumentError("item in parameter_names cannot be None")
            if not isinstance(name, str) or not name:
                raise ArgumentError("item in parameter_names cannot be empty")
        # frozen: bypass __setattr__ to store the normalized tuple
        object.__setattr__(self, "parameter_names", names)

    def render(self, *params) -> str:
        """
        Substitute params into the template.

        Raises:
            MessageFormattingError: If placeholders and params do not match
        """
        return format_message(self.text, params)
