"""
Remote logging service clients

Send log records to a remote log collector as JSON lines over TCP or UDP.
"""

from __future__ import annotations

import json
import socket
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from logging_wrapper.core.level import Level


@dataclass
class ConnectionStats:
    """
    Statistics for network connection monitoring.

    Tracks message counts, errors, and connection health metrics.
    """

    messages_sent: int = 0
    messages_failed: int = 0
    bytes_sent: int = 0
    reconnect_count: int = 0
    last_error: Optional[str] = None
    last_error_time: Optional[datetime] = None
    connected_at: Optional[datetime] = None
    is_connected: bool = False

    def record_success(self, bytes_count: int) -> None:
        """Record a successful message send."""
        self.messages_sent += 1
        self.bytes_sent += bytes_count

    def record_failure(self, error: str) -> None:
        """Record a failed message send."""
        self.messages_failed += 1
        self.last_error = error
        self.last_error_time = datetime.now()

    def record_reconnect(self) -> None:
        """Record a reconnection attempt."""
        self.reconnect_count += 1

    def to_dict(self) -> dict:
        """Convert stats to dictionary for serialization."""
        return {
            "messages_sent": self.messages_sent,
            "messages_failed": self.messages_failed,
            "bytes_sent": self.bytes_sent,
            "reconnect_count": self.reconnect_count,
            "last_error": self.last_error,
            "last_error_time": (
                self.last_error_time.isoformat()
                if self.last_error_time
                else None
            ),
            "connected_at": (
                self.connected_at.isoformat() if self.connected_at else None
            ),
            "is_connected": self.is_connected,
        }


class LoggingService(ABC):
    """Remote service receiving log records."""

    @abstractmethod
    def log(
        self,
        originator: str,
        context: Optional[Sequence[str]],
        level: Level,
        message: str,
        parameters: Optional[Sequence[str]],
        template: Optional[str] = None,
    ) -> None:
        """
        Deliver one record.

        Args:
            originator: Name of the logger sending the record
            context: Context strings (e.g. the named message name)
            level: Severity
            message: Formatted message
            parameters: Parameters as strings
            template: Message template before formatting

        Raises:
            ConnectionError: If the record cannot be delivered
        """

    def close(self) -> None:
        """Release connections."""


def encode_record(
    originator: str,
    context: Optional[Sequence[str]],
    level: Level,
    message: str,
    parameters: Optional[Sequence[str]],
    template: Optional[str] = None,
) -> bytes:
    """Encode one record as a UTF-8 JSON line."""
    record = {
        "timestamp": datetime.now().isoformat(),
        "originator": originator,
        "context": list(context) if context else [],
        "level": level.name,
        "message": message,
        "template": template,
        "parameters": list(parameters) if parameters else [],
    }
    return (json.dumps(record, ensure_ascii=False) + "\n").encode("utf-8")


class NetworkLoggingService(LoggingService):
    """
    Base class for socket-based logging service clients.

    Provides connection management with retry and exponential backoff and
    connection statistics. Records that cannot be sent raise
    ConnectionError; nothing is buffered.

    Thread Safety:
        This class is thread-safe. All public methods use internal locking.
    """

    def __init__(
        self,
        host: str,
        port: int,
        timeout: float = 5.0,
        reconnect_attempts: int = 3,
        reconnect_delay: float = 1.0,
        reconnect_backoff: float = 2.0,
    ):
        """
        Initialize logging service client.

        Args:
            host: Remote host address
            port: Remote port number
            timeout: Socket timeout in seconds
            reconnect_attempts: Maximum connection attempts per send
            reconnect_delay: Initial delay between connection attempts
            reconnect_backoff: Multiplier for exponential backoff
        """
        self.host = host
        self.port = port
        self.timeout = timeout
        self.reconnect_attempts = max(1, reconnect_attempts)
        self.reconnect_delay = reconnect_delay
        self.reconnect_backoff = reconnect_backoff

        self._socket: Optional[socket.socket] = None
        self._lock = threading.Lock()
        self._stats = ConnectionStats()
        self._closed = False

    @abstractmethod
    def _create_socket(self) -> socket.socket:
        """
        Create and configure socket for specific protocol.

        Returns:
            Configured socket instance
        """

    @abstractmethod
    def _send_data(self, data: bytes) -> None:
        """
        Send data using protocol-specific method.

        Raises:
            OSError: If the send fails
        """

    def _do_connect(self) -> None:
        """
        Perform actual connection (protocol-specific).

        Default does nothing (UDP doesn't need explicit connect).
        """

    def connect(self) -> bool:
        """
        Establish connection with retry logic.

        Returns:
            True if connection was established
        """
        with self._lock:
            return self._connect_internal()

    def _connect_internal(self) -> bool:
        """Internal connect without lock (caller must hold lock)."""
        if self._socket is not None:
            return True

        delay = self.reconnect_delay

        for attempt in range(self.reconnect_attempts):
            try:
                self._socket = self._create_socket()
                self._socket.settimeout(self.timeout)
                self._do_connect()
                self._stats.connected_at = datetime.now()
                self._stats.is_connected = True
                return True
            except OSError as e:
                self._stats.record_failure(str(e))
                self._close_socket()

                if attempt < self.reconnect_attempts - 1:
                    self._stats.record_reconnect()
                    time.sleep(delay)
                    delay *= self.reconnect_backoff

        return False

    def log(self, originator, context, level, message, parameters, template=None) -> None:
        data = encode_record(originator, context, level, message, parameters, template)

        with self._lock:
            if self._closed:
                raise ConnectionError("Logging service client is closed")
            if not self._connect_internal():
                raise ConnectionError(
                    f"Unable to connect to {self.host}:{self.port}: {self._stats.last_error}"
                )
            try:
                self._send_data(data)
            except OSError as e:
                self._stats.record_failure(str(e))
                self._close_socket()
                raise ConnectionError(f"Unable to send to {self.host}:{self.port}") from e
            self._stats.record_success(len(data))

    def _close_socket(self) -> None:
        """Close current socket (caller must hold lock)."""
        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None
        self._stats.is_connected = False

    def close(self) -> None:
        """Close connection and release resources."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._close_socket()

    def get_stats(self) -> ConnectionStats:
        """
        Get connection statistics.

        Returns:
            Copy of current connection statistics
        """
        with self._lock:
            return ConnectionStats(**vars(self._stats))

    def is_connected(self) -> bool:
        with self._lock:
            return self._stats.is_connected

    def __repr__(self) -> str:
        """String representation."""
        return f"{type(self).__name__}(host={self.host!r}, port={self.port})"


class TCPLoggingService(NetworkLoggingService):
    """
    TCP client with reliable, ordered delivery.

    Example:
        service = TCPLoggingService(host="log-collector.example.com", port=5140)
    """

    def __init__(self, host: str, port: int, nodelay: bool = True, keepalive: bool = True, **kwargs):
        """
        Args:
            host: Remote host address
            port: Remote port number
            nodelay: Enable TCP_NODELAY (disable Nagle's algorithm)
            keepalive: Enable TCP keep-alive
            **kwargs: NetworkLoggingService options
        """
        super().__init__(host, port, **kwargs)
        self.nodelay = nodelay
        self.keepalive = keepalive

    def _create_socket(self) -> socket.socket:
        """Create and configure TCP socket."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        if self.nodelay:
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)

        if self.keepalive:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)

        return sock

    def _do_connect(self) -> None:
        """Establish TCP connection."""
        self._socket.connect((self.host, self.port))

    def _send_data(self, data: bytes) -> None:
        self._socket.sendall(data)


class UDPLoggingService(NetworkLoggingService):
    """
    UDP client for fire-and-forget delivery.

    Note:
        UDP does not guarantee delivery or ordering; oversized records are
        truncated to the maximum datagram payload.
    """

    MAX_UDP_PAYLOAD = 65507

    def __init__(self, host: str, port: int, **kwargs):
        kwargs["reconnect_attempts"] = 1
        super().__init__(host, port, **kwargs)

    def _create_socket(self) -> socket.socket:
        """Create and configure UDP socket."""
        return socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def _send_data(self, data: bytes) -> None:
        if len(data) > self.MAX_UDP_PAYLOAD:
            data = data[: self.MAX_UDP_PAYLOAD]
        self._socket.sendto(data, (self.host, self.port))


SERVICE_PROTOCOLS = {
    "tcp": TCPLoggingService,
    "udp": UDPLoggingService,
}
