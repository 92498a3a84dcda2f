"""
Logger construction pipeline

Turns a Configuration into a backend wrapped in the configured decorators.
"""

from __future__ import annotations

import importlib
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from logging_wrapper.core import config_helper
from logging_wrapper.core.configuration import Configuration
from logging_wrapper.core.exceptions import ConfigError
from logging_wrapper.core.level import Level, ZeroConfigurationOption
from logging_wrapper.core.logger import DEFAULT_LEVEL, LOGGER_NAME, Logger
from logging_wrapper.core.registry import BackendFactory, BackendRegistry, default_registry
from logging_wrapper.decorators.exception_safe_logger import ExceptionSafeLogger
from logging_wrapper.decorators.level_filtered_logger import LevelFilteredLogger

_log = logging.getLogger(__name__)

DEFAULT_SECTION = "logging_wrapper.LogManager"

LOGGER_CLASS = "logger_class"
LOGGER_MODULE = "logger_module"
DEFAULT_CONFIG = "default_config"
FILTERED_LEVELS = "filtered_levels"
PROPAGATE_EXCEPTIONS = "propagate_exceptions"
EXCEPTION_LOGGER = "ExceptionLogger"

DEFAULT_BACKEND_ENV = "LOGGING_WRAPPER_DEFAULT_BACKEND"
DEFAULT_BACKEND = "console"
EXCEPTION_LOGGER_DEFAULT_LEVEL = Level.WARN


class LogManager:
    """
    Builds loggers from configuration.

    Steps:
        1. Resolve the backend named by logger_class (importing
           logger_module first when given)
        2. Apply the default_config preset (reserved default section only)
        3. Construct the backend
        4. Wrap in LevelFilteredLogger when filtered_levels is set
        5. Wrap in ExceptionSafeLogger unless propagate_exceptions is true

    A LogManager holds no state besides its registry, so one instance can
    build loggers for independent configurations concurrently.

    Example:
        config = Configuration.from_dict("svc", {
            "logger_class": "file",
            "logger_name": "svc",
            "file": "logs/svc.log",
            "filtered_levels": ["DEBUG"],
        })
        with LogManager().create_logger(config) as logger:
            logger.info("started {0}", "svc")
    """

    def __init__(self, registry: Optional[BackendRegistry] = None):
        """
        Args:
            registry: Backend registry (default: the package-wide registry)
        """
        self._registry = registry if registry is not None else default_registry

    @property
    def registry(self) -> BackendRegistry:
        return self._registry

    def create_logger(self, configuration: Configuration) -> Logger:
        """
        Build a logger.

        Args:
            configuration: Logger configuration section

        Returns:
            Fully assembled logger

        Raises:
            ArgumentError: If configuration is None
            ConfigError: If anything about the configuration is wrong
        """
        config_helper.validate_not_none(configuration, "configuration")

        factory = self._resolve_backend(configuration)
        configuration = self._apply_zero_configuration(configuration, factory)
        logger = self._instantiate(configuration, factory)

        try:
            logger = self._apply_filter_levels_policy(configuration, logger)
            logger = self._apply_exception_policy(configuration, logger)
        except Exception:
            logger.dispose()
            raise

        _log.debug("Created logger %r from section '%s'", logger, configuration.name)
        return logger

    def create_default_logger(self) -> Logger:
        """
        Build a logger from the reserved default section with no explicit settings.

        The backend comes from the LOGGING_WRAPPER_DEFAULT_BACKEND environment
        variable (default "console"), the logger is named after the running
        program and the Component preset fills in backend defaults.
        """
        backend = os.environ.get(DEFAULT_BACKEND_ENV, "").strip() or DEFAULT_BACKEND
        program = Path(sys.argv[0]).stem if sys.argv and sys.argv[0] else "python"
        configuration = Configuration(DEFAULT_SECTION, {
            LOGGER_CLASS: backend,
            LOGGER_NAME: program or "python",
            DEFAULT_CONFIG: ZeroConfigurationOption.COMPONENT.value,
        })
        return self.create_logger(configuration)

    def _resolve_backend(self, configuration: Configuration) -> BackendFactory:
        class_name = config_helper.get_string_attribute(configuration, LOGGER_CLASS, True)
        module_name = config_helper.get_string_attribute(configuration, LOGGER_MODULE, False)

        if module_name is not None:
            try:
                importlib.import_module(module_name)
            except Exception as e:
                raise ConfigError(
                    f"Unable to load '{class_name}' because module '{module_name}' "
                    f"could not be imported."
                ) from e

        factory = self._registry.resolve(class_name)
        if factory is None:
            if module_name is None:
                raise ConfigError(f"Backend '{class_name}' is not registered.")
            raise ConfigError(
                f"Backend '{class_name}' is not registered by module '{module_name}'."
            )
        return factory

    def _apply_zero_configuration(
        self, configuration: Configuration, factory: BackendFactory
    ) -> Configuration:
        if configuration.name != DEFAULT_SECTION:
            return configuration

        preset = config_helper.get_string_attribute(configuration, DEFAULT_CONFIG, False)
        if preset is None:
            return configuration

        try:
            option = ZeroConfigurationOption.from_string(preset)
        except ValueError as e:
            raise ConfigError(
                f"Invalid value '{preset}' of attribute '{DEFAULT_CONFIG}' in configuration"
            ) from e

        initializer = getattr(factory, "initialize_zero_configuration", None)
        if initializer is None:
            raise ConfigError(f"Backend {factory!r} does not support zero configuration")

        try:
            derived = initializer(option, configuration)
        except Exception as e:
            raise ConfigError("Error occurs when initializing the zero configuration") from e

        if not isinstance(derived, Configuration):
            raise ConfigError(
                f"Zero configuration of {factory!r} returned {type(derived).__name__}, "
                f"expected Configuration"
            )
        _log.debug("Applied zero configuration preset %s", option)
        return derived

    def _instantiate(self, configuration: Configuration, factory: BackendFactory) -> Logger:
        try:
            logger = factory(configuration)
        except ConfigError:
            raise
        except Exception as e:
            raise ConfigError(f"Fail to create logger from section '{configuration.name}'") from e

        if not isinstance(logger, Logger):
            raise ConfigError(
                f"Backend factory {factory!r} returned {type(logger).__name__}, expected Logger"
            )
        return logger

    def _apply_filter_levels_policy(self, configuration: Configuration, logger: Logger) -> Logger:
        level_names = config_helper.get_string_list_attribute(configuration, FILTERED_LEVELS, False)
        if not level_names:
            return logger

        levels: List[Level] = []
        for level_name in level_names:
            try:
                level = Level.from_string(level_name)
            except ValueError as e:
                raise ConfigError(
                    f"Invalid value '{level_name}' in attribute '{FILTERED_LEVELS}' in configuration"
                ) from e
            if level in levels:
                raise ConfigError(
                    f"Duplicate value '{level_name}' in attribute '{FILTERED_LEVELS}' in configuration"
                )
            levels.append(level)

        return LevelFilteredLogger(logger, levels)

    def _apply_exception_policy(self, configuration: Configuration, logger: Logger) -> Logger:
        if config_helper.get_boolean_attribute(configuration, PROPAGATE_EXCEPTIONS, False):
            return logger

        child = configuration.get_child(EXCEPTION_LOGGER)
        if child is None:
            return ExceptionSafeLogger(logger, logger)

        child = child.with_defaults({DEFAULT_LEVEL: EXCEPTION_LOGGER_DEFAULT_LEVEL.name})
        try:
            exception_logger = self.create_logger(child)
        except Exception as e:
            raise ConfigError("Fail to create exception logger") from e
        return ExceptionSafeLogger(logger, exception_logger)


def create_logger(
    configuration: Configuration, registry: Optional[BackendRegistry] = None
) -> Logger:
    """Build a logger with a LogManager over registry."""
    return LogManager(registry).create_logger(configuration)
