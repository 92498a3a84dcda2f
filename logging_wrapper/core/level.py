"""
Log level enumerations

Severity levels and zero-configuration presets shared by every logger.
"""

from enum import Enum, IntEnum
from typing import Dict, Optional


class Level(IntEnum):
    """
    Log level enumeration.

    Ordered from the most urgent (FATAL) to the least urgent (DEBUG).
    OFF is a sentinel lower than every other level and means "never log".
    """

    FATAL = 80000
    ERROR = 70000
    FAILUREAUDIT = 60000
    SUCCESSAUDIT = 50000
    WARN = 40000
    INFO = 30000
    DEBUG = 20000
    OFF = 1

    def __str__(self) -> str:
        """String representation of log level."""
        return self.name

    @classmethod
    def from_string(cls, level_str: str) -> "Level":
        """
        Convert string to Level.

        Args:
            level_str: Level name (case-insensitive, surrounding whitespace ignored)

        Returns:
            Level enum value

        Raises:
            ValueError: If level_str is not valid
        """
        name = str(level_str).strip().upper()
        if name in cls.__members__:
            return cls[name]
        raise ValueError(f"Invalid log level: {level_str}")

    @property
    def color_code(self) -> str:
        """
        Get ANSI color code for this level.

        Returns:
            ANSI escape sequence
        """
        colors = {
            Level.DEBUG: "\033[36m",         # Cyan
            Level.INFO: "\033[32m",          # Green
            Level.WARN: "\033[33m",          # Yellow
            Level.SUCCESSAUDIT: "\033[34m",  # Blue
            Level.FAILUREAUDIT: "\033[35m",  # Magenta
            Level.ERROR: "\033[31m",         # Red
            Level.FATAL: "\033[1;31m",       # Bold red
        }
        return colors.get(self, "\033[0m")

    @property
    def reset_code(self) -> str:
        """ANSI reset code."""
        return "\033[0m"


class ZeroConfigurationOption(Enum):
    """
    Named presets a backend applies when explicit configuration is sparse.
    """

    TEST = "Test"
    COMPONENT = "Component"
    CERTIFICATION = "Certification"
    CLIENT_DEBUG = "ClientDebug"
    CLIENT_STRESS = "ClientStress"
    RELEASE = "Release"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, option_str: str) -> "ZeroConfigurationOption":
        """
        Convert string to ZeroConfigurationOption.

        Args:
            option_str: Preset name, e.g. "Release" or "clientdebug"

        Returns:
            ZeroConfigurationOption enum value

        Raises:
            ValueError: If option_str names no preset
        """
        wanted = str(option_str).strip().lower()
        for option in cls:
            if option.value.lower() == wanted:
                return option
        raise ValueError(f"Invalid zero configuration option: {option_str}")

    @property
    def threshold(self) -> Optional[Level]:
        """Lowest level a preset lets through, or None for no threshold."""
        return PRESET_THRESHOLDS.get(self)


PRESET_THRESHOLDS: Dict[ZeroConfigurationOption, Level] = {
    ZeroConfigurationOption.COMPONENT: Level.INFO,
    ZeroConfigurationOption.CLIENT_STRESS: Level.ERROR,
    ZeroConfigurationOption.RELEASE: Level.WARN,
}
