"""
Backend registry

Maps configuration identifiers to backend factories. A factory is any
callable taking a Configuration and returning a Logger; classes may also
provide an initialize_zero_configuration classmethod.
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, List, Optional

from logging_wrapper.core.configuration import Configuration
from logging_wrapper.core.logger import Logger

BackendFactory = Callable[[Configuration], Logger]


class BackendRegistry:
    """
    Registry of backend factories keyed by identifier.

    Thread Safety:
        All methods are thread-safe for concurrent access.

    Example:
        registry = BackendRegistry()
        registry.register("memory", MemoryLogger)
        factory = registry.resolve("memory")
    """

    def __init__(self):
        """Initialize empty registry."""
        self._factories: Dict[str, BackendFactory] = {}
        self._lock = threading.RLock()

    def register(self, name: str, factory: BackendFactory, *aliases: str) -> BackendFactory:
        """
        Register a factory under a name and optional aliases.

        Args:
            name: Identifier used by logger_class
            factory: Callable taking a Configuration
            *aliases: Additional identifiers for the same factory

        Returns:
            The factory, so register() can back a decorator

        Raises:
            ValueError: If a name is empty or already registered
            TypeError: If factory is not callable
        """
        if not callable(factory):
            raise TypeError("factory must be callable")

        names = (name,) + aliases
        with self._lock:
            for key in names:
                if not key:
                    raise ValueError("Backend name must be a non-empty string")
                if key in self._factories:
                    raise ValueError(f"Backend '{key}' is already registered")
            for key in names:
                self._factories[key] = factory
        return factory

    def unregister(self, name: str) -> None:
        """
        Unregister a backend identifier.

        Note:
            Does nothing if the name is not registered.
        """
        with self._lock:
            self._factories.pop(name, None)

    def resolve(self, name: str) -> Optional[BackendFactory]:
        """Get the factory registered under name, or None."""
        with self._lock:
            return self._factories.get(name)

    def names(self) -> List[str]:
        """All registered identifiers."""
        with self._lock:
            return list(self._factories)

    def copy(self) -> "BackendRegistry":
        """Independent registry with the same entries."""
        clone = BackendRegistry()
        with self._lock:
            clone._factories.update(self._factories)
        return clone

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._factories

    def __repr__(self) -> str:
        """String representation."""
        return f"BackendRegistry(backends={sorted(self.names())})"


default_registry = BackendRegistry()


def register_backend(name: str, *aliases: str, registry: Optional[BackendRegistry] = None):
    """
    Class decorator registering a backend.

    Example:
        @register_backend("memory", "MemoryLogger")
        class MemoryLogger(ConfiguredLogger):
            ...
    """
    target = registry if registry is not None else default_registry

    def decorator(factory: BackendFactory) -> BackendFactory:
        return target.register(name, factory, *aliases)

    return decorator
