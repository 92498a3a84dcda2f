"""
Configuration management

Immutable, hierarchical configuration sections consumed by loggers and by
the construction pipeline.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from logging_wrapper.core.exceptions import ArgumentError, ConfigError

Scalar = Union[str, int, float, bool]


def _normalize_scalar(value: Any) -> str:
    """Convert an attribute value to its trimmed string form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip()


def _normalize_values(value: Any) -> Tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(_normalize_scalar(item) for item in value)
    return (_normalize_scalar(value),)


class Configuration:
    """
    A named configuration section.

    A section holds attributes (each one a tuple of trimmed strings, so the
    same key works as a single value or as a list) and named child sections.
    Instances never change after construction; use with_defaults() to
    derive a new section with extra default values.

    Example:
        config = Configuration.from_dict("svc", {
            "logger_class": "memory",
            "logger_name": "svc",
            "filtered_levels": ["DEBUG"],
            "NamedMessages": {
                "greeting": {"text": "Hello {0}", "parameters": ["user"]},
            },
        })
    """

    def __init__(
        self,
        name: str,
        attributes: Optional[Mapping[str, Any]] = None,
        children: Optional[Iterable["Configuration"]] = None,
    ):
        """
        Initialize configuration section.

        Args:
            name: Section name
            attributes: Attribute values; lists and tuples become multi-valued
            children: Child sections, names must be unique

        Raises:
            ArgumentError: If name is empty or child names collide
        """
        if not isinstance(name, str) or not name:
            raise ArgumentError("configuration name must be a non-empty string")

        self._name = name
        self._attributes: Dict[str, Tuple[str, ...]] = {}
        self._children: Dict[str, Configuration] = {}

        for key, value in (attributes or {}).items():
            if value is None:
                continue
            self._attributes[key] = _normalize_values(value)

        for child in children or ():
            if not isinstance(child, Configuration):
                raise ArgumentError("children must be Configuration instances")
            if child.name in self._children:
                raise ArgumentError(f"Duplicate child section '{child.name}'")
            self._children[child.name] = child

    @property
    def name(self) -> str:
        """Section name."""
        return self._name

    @property
    def attribute_names(self) -> Tuple[str, ...]:
        """Names of all attributes in this section."""
        return tuple(self._attributes)

    @property
    def children(self) -> Tuple["Configuration", ...]:
        """Child sections in declaration order."""
        return tuple(self._children.values())

    def has_attribute(self, key: str) -> bool:
        return key in self._attributes

    def get_simple_attribute(self, key: str) -> Optional[str]:
        """
        Get a single-valued attribute.

        Args:
            key: Attribute name

        Returns:
            The value, or None if the attribute is absent

        Raises:
            ValueError: If the attribute holds more than one value
        """
        values = self._attributes.get(key)
        if not values:
            return None
        if len(values) > 1:
            raise ValueError(f"Attribute '{key}' has {len(values)} values, expected one")
        return values[0]

    def get_attribute(self, key: str) -> Optional[Tuple[str, ...]]:
        """
        Get all values of an attribute.

        Returns:
            Tuple of values, or None if the attribute is absent
        """
        return self._attributes.get(key)

    def get_child(self, name: str) -> Optional["Configuration"]:
        """Get a child section by name, or None."""
        return self._children.get(name)

    def with_defaults(self, defaults: Mapping[str, Any]) -> "Configuration":
        """
        Derive a section with defaults layered under the explicit attributes.

        Attributes already present keep their values; children are shared.

        Args:
            defaults: Default attribute values

        Returns:
            New Configuration with the same name
        """
        merged: Dict[str, Any] = {
            key: value for key, value in defaults.items() if value is not None
        }
        merged.update(self._attributes)
        return Configuration(self._name, merged, self._children.values())

    def with_child(self, child: "Configuration") -> "Configuration":
        """Derive a section with child added, replacing any child of the same name."""
        children = dict(self._children)
        children[child.name] = child
        return Configuration(self._name, self._attributes, children.values())

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert section to a dictionary accepted by from_dict().

        Single values become strings, multi-valued attributes lists.
        """
        data: Dict[str, Any] = {}
        for key, values in self._attributes.items():
            data[key] = values[0] if len(values) == 1 else list(values)
        for child in self._children.values():
            data[child.name] = child.to_dict()
        return data

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "Configuration":
        """
        Create section from a dictionary.

        Nested mappings become child sections, lists become multi-valued
        attributes, None values are skipped and everything else is a single
        attribute value.

        Args:
            name: Section name
            data: Section content

        Returns:
            New Configuration
        """
        attributes: Dict[str, Any] = {}
        children = []
        for key, value in data.items():
            if isinstance(value, Mapping):
                children.append(cls.from_dict(key, value))
            else:
                attributes[key] = value
        return cls(name, attributes, children)

    @classmethod
    def from_json_file(cls, filepath: Union[str, Path], name: str) -> "Configuration":
        """
        Load one section from a JSON document.

        The document's top-level object maps section names to sections.

        Args:
            filepath: Path to the JSON document
            name: Section to load

        Returns:
            New Configuration

        Raises:
            ConfigError: If the file cannot be read or lacks the section
        """
        path = Path(filepath)
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigError(f"Unable to load configuration file '{path}'") from e

        section = document.get(name) if isinstance(document, dict) else None
        if not isinstance(section, dict):
            raise ConfigError(f"Section '{name}' is not present in '{path}'")
        return cls.from_dict(name, section)

    def __iter__(self) -> Iterator["Configuration"]:
        return iter(self._children.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Configuration):
            return NotImplemented
        return (
            self._name == other._name
            and self._attributes == other._attributes
            and self._children == other._children
        )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"Configuration(name={self._name!r}, "
            f"attributes={sorted(self._attributes)}, "
            f"children={list(self._children)})"
        )
