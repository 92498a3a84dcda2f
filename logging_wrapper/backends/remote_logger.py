"""
Remote backend

Sends each record to a remote logging service. The configuration carries a
``loggingService`` child section describing how to reach the service:

    {
        "logger_class": "remote",
        "logger_name": "orders",
        "loggingService": {"protocol": "tcp", "host": "collector", "port": 5140}
    }
"""

from typing import Any, Optional, Sequence, Tuple

from logging_wrapper.core import config_helper
from logging_wrapper.core.configuration import Configuration
from logging_wrapper.core.exceptions import ConfigError, LoggingError
from logging_wrapper.core.level import Level
from logging_wrapper.core.logger import ConfiguredLogger
from logging_wrapper.core.message_format import format_message
from logging_wrapper.core.named_message import NamedMessage
from logging_wrapper.core.registry import register_backend
from logging_wrapper.backends.logging_service import SERVICE_PROTOCOLS, LoggingService

LOGGING_SERVICE = "loggingService"
PROTOCOL = "protocol"
HOST = "host"
PORT = "port"
TIMEOUT = "timeout"
RECONNECT_ATTEMPTS = "reconnect_attempts"
RECONNECT_DELAY = "reconnect_delay"


def create_service(section: Configuration) -> LoggingService:
    """
    Build a logging service client from a loggingService section.

    Raises:
        ConfigError: If the protocol is unknown or host/port are invalid
    """
    protocol = (config_helper.get_string_attribute(section, PROTOCOL, False) or "tcp").lower()
    service_class = SERVICE_PROTOCOLS.get(protocol)
    if service_class is None:
        raise ConfigError(f"Invalid value '{protocol}' of attribute '{PROTOCOL}'")

    host = config_helper.get_string_attribute(section, HOST, True)
    port = config_helper.get_int_attribute(section, PORT, None)
    if port is None:
        raise ConfigError(f"Missing attribute '{PORT}' in section '{section.name}'")
    if not 0 < port < 65536:
        raise ConfigError(f"Invalid port {port}")

    return service_class(
        host,
        port,
        timeout=config_helper.get_float_attribute(section, TIMEOUT, 5.0),
        reconnect_attempts=config_helper.get_int_attribute(section, RECONNECT_ATTEMPTS, 3),
        reconnect_delay=config_helper.get_float_attribute(section, RECONNECT_DELAY, 1.0),
    )


@register_backend("remote", "logging_wrapper.backends.RemoteLogger")
class RemoteLogger(ConfiguredLogger):
    """
    Send records to a remote logging service.

    Each record carries the logger name as originator, the formatted message,
    the template and the parameters as strings. Named messages add their
    name as context. Every level except OFF is enabled; filtering is left to
    the service.

    Parameters must not be None. Delivery failures raise LoggingError.
    """

    def __init__(self, configuration: Configuration, service: Optional[LoggingService] = None):
        """
        Initialize remote logger.

        Args:
            configuration: Logger configuration
            service: Client to use instead of the loggingService section
        """
        super().__init__(configuration)
        if service is None:
            section = configuration.get_child(LOGGING_SERVICE)
            if section is None:
                raise ConfigError(
                    f"Missing section '{LOGGING_SERVICE}' in '{configuration.name}'"
                )
            service = create_service(section)
        self._service = service

    @property
    def service(self) -> LoggingService:
        return self._service

    def is_level_enabled(self, level: Level) -> bool:
        return level != Level.OFF

    def log(self, level: Level, message: str, *params: Any) -> None:
        self._send(level, message, params, None)

    def _log_named_message(
        self, level: Level, message: NamedMessage, params: Tuple[Any, ...]
    ) -> None:
        config_helper.validate_not_none(message, "message")
        self._send(level, message.text, params, [message.name])

    def _send(
        self,
        level: Level,
        template: str,
        params: Tuple[Any, ...],
        context: Optional[Sequence[str]],
    ) -> None:
        config_helper.validate_not_none(template, "message")
        if not self.is_level_enabled(level):
            return
        if any(param is None for param in params):
            raise LoggingError("Remote logging does not accept None parameters")

        text = format_message(template, params)
        try:
            self._service.log(
                self.log_name,
                context,
                level,
                text,
                [str(param) for param in params],
                template,
            )
        except Exception as e:
            raise LoggingError(f"Error occurs when logging to '{self.log_name}'") from e

    def dispose(self) -> None:
        try:
            self._service.close()
        except Exception:
            pass
