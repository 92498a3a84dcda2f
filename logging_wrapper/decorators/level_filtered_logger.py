"""
Level-filtered logger

Suppresses log calls at a configured set of levels.
"""

from typing import Any, FrozenSet, Iterable, Optional, Tuple

from logging_wrapper.core import config_helper
from logging_wrapper.core.level import Level
from logging_wrapper.core.logger import Logger
from logging_wrapper.core.named_message import NamedMessage
from logging_wrapper.decorators.base_decorator import LoggerDecorator


class LevelFilteredLogger(LoggerDecorator):
    """
    Drop calls whose level is in the filtered set, forward everything else.

    This is a pure level gate: errors raised by the underlying logger
    propagate unchanged.

    Example:
        # Silence DEBUG and INFO
        logger = LevelFilteredLogger(backend, [Level.DEBUG, Level.INFO])
    """

    def __init__(self, underlying_logger: Logger, filtered_levels: Iterable[Level]):
        """
        Initialize level filter.

        Args:
            underlying_logger: Logger receiving unfiltered calls
            filtered_levels: Levels to suppress (may be empty)

        Raises:
            ArgumentError: If either argument is None
        """
        super().__init__(underlying_logger)
        config_helper.validate_not_none(filtered_levels, "filtered_levels")
        self._filtered_levels: FrozenSet[Level] = frozenset(filtered_levels)

    @property
    def filtered_levels(self) -> FrozenSet[Level]:
        return self._filtered_levels

    def is_filtered(self, level: Level) -> bool:
        """Whether calls at level are suppressed."""
        return level in self._filtered_levels

    def log(self, level: Level, message: str, *params: Any) -> None:
        config_helper.validate_not_none(message, "message")
        if self.is_filtered(level):
            return
        self._underlying.log(level, message, *params)

    def log_named_message(
        self, identifier: str, *params: Any, level: Optional[Level] = None
    ) -> None:
        effective_level = level
        if effective_level is None:
            message = self._underlying.named_messages.get(identifier) if identifier else None
            if message is not None:
                effective_level = message.default_level
        if effective_level is not None and self.is_filtered(effective_level):
            return
        self._underlying.log_named_message(identifier, *params, level=level)

    def _log_named_message(
        self, level: Level, message: NamedMessage, params: Tuple[Any, ...]
    ) -> None:
        config_helper.validate_not_none(message, "message")
        if self.is_filtered(level):
            return
        self._underlying._log_named_message(level, message, params)

    def is_level_enabled(self, level: Level) -> bool:
        return self._underlying.is_level_enabled(level)

    def dispose(self) -> None:
        self._underlying.dispose()

    def __repr__(self) -> str:
        """String representation."""
        levels = sorted(level.name for level in self._filtered_levels)
        return f"LevelFilteredLogger({self._underlying!r}, filtered={levels})"
