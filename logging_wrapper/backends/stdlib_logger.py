"""
Standard library logging backend

Forwards messages to a logging.Logger named after logger_name. Handlers,
formats and thresholds come from a JSON logging.config.dictConfig document.
"""

import json
import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, Tuple

from logging_wrapper.core import config_helper
from logging_wrapper.core.configuration import Configuration
from logging_wrapper.core.exceptions import ConfigError, LoggingError, MessageFormattingError
from logging_wrapper.core.level import Level, ZeroConfigurationOption
from logging_wrapper.core.logger import ConfiguredLogger
from logging_wrapper.core.message_format import format_message
from logging_wrapper.core.named_message import NamedMessage
from logging_wrapper.core.registry import register_backend

CONFIG_FILE = "config_file"
DEFAULT_CONFIG_FILE = "logging.json"

LEVEL_MAPPING: Dict[Level, int] = {
    Level.FATAL: logging.CRITICAL,
    Level.ERROR: logging.ERROR,
    Level.FAILUREAUDIT: logging.DEBUG,
    Level.SUCCESSAUDIT: logging.DEBUG,
    Level.WARN: logging.WARNING,
    Level.INFO: logging.INFO,
    Level.DEBUG: logging.DEBUG,
}

PRESET_FORMAT = "%(asctime)s [%(threadName)s] %(levelname)-5s %(name)s - %(message)s"


def build_preset_config(option: ZeroConfigurationOption) -> Dict[str, Any]:
    """
    dictConfig document for a zero-configuration preset.

    Test and Component log to a plain file; the other presets roll the file
    at midnight, keeping every file for Certification and 30 otherwise.
    """
    if option == ZeroConfigurationOption.TEST:
        handler = {"class": "logging.FileHandler", "filename": "test_files/log.txt"}
    elif option == ZeroConfigurationOption.COMPONENT:
        handler = {"class": "logging.FileHandler", "filename": "log.txt"}
    else:
        handler = {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": "logs/log.txt",
            "when": "midnight",
            "backupCount": 0 if option == ZeroConfigurationOption.CERTIFICATION else 30,
        }
    handler["formatter"] = "default"
    handler["encoding"] = "utf-8"

    root: Dict[str, Any] = {"handlers": ["default"]}
    if option.threshold is not None:
        root["level"] = logging.getLevelName(LEVEL_MAPPING[option.threshold])
    else:
        root["level"] = "DEBUG"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": PRESET_FORMAT}},
        "handlers": {"default": handler},
        "root": root,
    }


def apply_config_file(path: Path) -> None:
    """
    Load a dictConfig JSON document and configure logging with it.

    Directories of file handlers are created first.

    Raises:
        ConfigError: If the file is missing, not JSON or rejected by dictConfig
    """
    if not path.exists():
        raise ConfigError(f"Unable to load '{path}' for logging configuration")
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
        for handler in document.get("handlers", {}).values():
            filename = handler.get("filename")
            if filename:
                Path(filename).parent.mkdir(parents=True, exist_ok=True)
        logging.config.dictConfig(document)
    except Exception as e:
        raise ConfigError(f"Unable to initialize logging from '{path}'") from e


@register_backend("stdlib", "logging_wrapper.backends.StdlibLogger")
class StdlibLogger(ConfiguredLogger):
    """
    Adapter over the standard library logging framework.

    Named messages pass their parameters natively through ``extra``: the
    LogRecord gets a ``named_message`` attribute holding the message name
    and a ``parameters`` dict mapping each declared name to its value.

    Configuration attributes:
        config_file: JSON dictConfig document applied at construction (optional)
    """

    def __init__(self, configuration: Configuration):
        super().__init__(configuration)
        config_file = config_helper.get_string_attribute(configuration, CONFIG_FILE, False)
        self.config_file = Path(config_file) if config_file else None
        if self.config_file is not None:
            apply_config_file(self.config_file)
        self._logger = logging.getLogger(self.log_name)

    @property
    def stdlib_logger(self) -> logging.Logger:
        return self._logger

    @classmethod
    def initialize_zero_configuration(
        cls, option: ZeroConfigurationOption, configuration: Configuration
    ) -> Configuration:
        """
        Default config_file to logging.json and write the preset document
        there when the file does not exist yet.
        """
        config_helper.validate_not_none(configuration, "configuration")
        config_file = config_helper.get_string_attribute(configuration, CONFIG_FILE, False)
        derived = configuration
        if config_file is None:
            config_file = DEFAULT_CONFIG_FILE
            derived = configuration.with_defaults({CONFIG_FILE: config_file})

        path = Path(config_file)
        if not path.exists():
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(json.dumps(build_preset_config(option), indent=2), encoding="utf-8")
            except OSError as e:
                raise ConfigError(f"Fail to write the configuration file '{path}'") from e
        return derived

    def is_level_enabled(self, level: Level) -> bool:
        mapped = LEVEL_MAPPING.get(level)
        if mapped is None:
            return False
        return self._logger.isEnabledFor(mapped)

    def log(self, level: Level, message: str, *params: Any) -> None:
        text = self._render(level, message, params)
        if text is None:
            return
        self._emit(level, text, None)

    def _log_named_message(
        self, level: Level, message: NamedMessage, params: Tuple[Any, ...]
    ) -> None:
        config_helper.validate_not_none(message, "message")
        if level == Level.OFF or not self.is_level_enabled(level):
            return
        if len(params) != len(message.parameter_names):
            raise MessageFormattingError(
                f"Message '{message.name}' expects {len(message.parameter_names)} "
                f"parameters, got {len(params)}"
            )
        text = format_message(message.text, params)
        extra = {
            "named_message": message.name,
            "parameters": dict(zip(message.parameter_names, params)),
        }
        self._emit(level, text, extra)

    def _emit(self, level: Level, text: str, extra) -> None:
        try:
            self._logger.log(LEVEL_MAPPING[level], text, extra=extra)
        except Exception as e:
            raise LoggingError("Error occurs when logging") from e

    def dispose(self) -> None:
        for handler in list(self._logger.handlers):
            try:
                handler.flush()
            except Exception:
                pass
