"""
Record written by the memory, console and file backends
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional
import threading

from logging_wrapper.core.level import Level


@dataclass(frozen=True)
class LogEntry:
    """
    One logging call, after its message was rendered.

    Attributes:
        level: Level of the call
        message: Rendered message text
        logger_name: log_name of the backend that recorded it
        named_message: Name of the NamedMessage logged, None for plain calls
        parameters: Parameter values keyed by their declared names
            (named messages only)
        timestamp: Creation time
        thread_name: Name of the calling thread
    """

    level: Level
    message: str
    logger_name: str = ""
    named_message: Optional[str] = None
    parameters: Mapping[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
    thread_name: str = field(default_factory=lambda: threading.current_thread().name)

    def __post_init__(self):
        if not isinstance(self.level, Level):
            raise TypeError("level must be Level enum")
        if self.parameters and self.named_message is None:
            raise ValueError("parameters are only recorded for named messages")

    @property
    def is_named(self) -> bool:
        return self.named_message is not None

    def describe_parameters(self) -> str:
        """Parameters as space separated name=value pairs."""
        return " ".join(f"{name}={value}" for name, value in self.parameters.items())

    def to_dict(self, include_thread: bool = True) -> Dict[str, Any]:
        """
        Convert to a JSON-ready dictionary.

        Named-message fields appear only for named messages.
        """
        data: Dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.name,
            "message": self.message,
        }
        if self.logger_name:
            data["logger"] = self.logger_name
        if include_thread:
            data["thread"] = self.thread_name
        if self.is_named:
            data["named_message"] = self.named_message
            data["parameters"] = dict(self.parameters)
        return data
