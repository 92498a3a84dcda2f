"""
Typed configuration attribute readers

Every reader converts configuration problems into ConfigError.
"""

from typing import List, Optional

from logging_wrapper.core.configuration import Configuration
from logging_wrapper.core.exceptions import ArgumentError, ConfigError
from logging_wrapper.core.level import Level


def validate_not_none(value, param_name: str) -> None:
    """Raise ArgumentError if value is None."""
    if value is None:
        raise ArgumentError(f"The value of parameter '{param_name}' shouldn't be None.")


def validate_not_empty_string(value: Optional[str], param_name: str) -> None:
    """Raise ArgumentError if value is None or the empty string."""
    validate_not_none(value, param_name)
    if value == "":
        raise ArgumentError(f"The value of parameter '{param_name}' shouldn't be empty.")


def _read_simple(config: Configuration, name: str) -> Optional[str]:
    try:
        return config.get_simple_attribute(name)
    except ValueError as e:
        raise ConfigError(f"Something wrong with attribute '{name}' of '{config.name}'.") from e


def get_string_attribute(config: Configuration, name: str, required: bool) -> Optional[str]:
    """
    Read a string attribute.

    Args:
        config: Configuration section
        name: Attribute name
        required: Whether a missing attribute is an error

    Returns:
        The value, or None if the attribute is optional and absent

    Raises:
        ConfigError: If a required attribute is missing or the value is empty
    """
    value = _read_simple(config, name)
    if value is None:
        if required:
            raise ConfigError(f"Required '{name}' attribute is not set in '{config.name}'.")
        return None
    if value == "":
        raise ConfigError(f"Invalid value of attribute '{name}' in '{config.name}': empty string.")
    return value


def get_boolean_attribute(config: Configuration, name: str, default: bool) -> bool:
    """
    Read a boolean attribute ("true" or "false", case-insensitive).

    Raises:
        ConfigError: If the value is not a boolean literal
    """
    value = _read_simple(config, name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ConfigError(f"Invalid boolean value '{value}' of attribute '{name}' in '{config.name}'.")


def get_int_attribute(config: Configuration, name: str, default: Optional[int]) -> Optional[int]:
    """
    Read an integer attribute.

    Raises:
        ConfigError: If the value is not an integer
    """
    value = _read_simple(config, name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(
            f"Invalid integer value '{value}' of attribute '{name}' in '{config.name}'."
        ) from e


def get_float_attribute(config: Configuration, name: str, default: float) -> float:
    """
    Read a floating point attribute.

    Raises:
        ConfigError: If the value is not a number
    """
    value = _read_simple(config, name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ConfigError(
            f"Invalid numeric value '{value}' of attribute '{name}' in '{config.name}'."
        ) from e


def get_level_attribute(config: Configuration, name: str, default: Level) -> Level:
    """
    Read a Level attribute by name (case-insensitive).

    Raises:
        ConfigError: If the value names no level
    """
    value = _read_simple(config, name)
    if value is None:
        return default
    try:
        return Level.from_string(value)
    except ValueError as e:
        raise ConfigError(
            f"Invalid level '{value}' of attribute '{name}' in '{config.name}'."
        ) from e


def get_string_list_attribute(config: Configuration, name: str, required: bool) -> List[str]:
    """
    Read a list attribute.

    Returns:
        The values in order; empty if the attribute is optional and absent

    Raises:
        ConfigError: If a required attribute is missing or any value is empty
    """
    values = config.get_attribute(name)
    if values is None:
        if required:
            raise ConfigError(f"Required '{name}' attribute is not set in '{config.name}'.")
        return []
    if any(value == "" for value in values):
        raise ConfigError(f"Invalid value of attribute '{name}' in '{config.name}': empty string.")
    return list(values)
