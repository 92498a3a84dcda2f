"""File backend with optional size-based rotation"""

import logging
from pathlib import Path
from typing import Optional

from logging_wrapper.core import config_helper
from logging_wrapper.core.configuration import Configuration
from logging_wrapper.core.exceptions import ConfigError
from logging_wrapper.core.level import ZeroConfigurationOption
from logging_wrapper.core.log_entry import LogEntry
from logging_wrapper.core.registry import register_backend
from logging_wrapper.backends.entry_logger import MIN_LEVEL, EntryLogger, load_formatter

FILE = "file"
ENCODING = "encoding"
MAX_BYTES = "max_bytes"
BACKUP_COUNT = "backup_count"

DEFAULT_BACKUP_COUNT = 5
PRESET_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
PRESET_BACKUP_COUNT = 30

_log = logging.getLogger(__name__)


@register_backend("file", "logging_wrapper.backends.FileLogger")
class FileLogger(EntryLogger):
    """
    Append log entries to a file.

    When max_bytes is set the file rotates once it reaches that size:
    log.txt becomes log.txt.1, log.txt.1 becomes log.txt.2 and so on, up to
    backup_count backups. A negative backup_count keeps every backup; zero
    keeps none.

    Configuration attributes:
        file: Path of the log file (required)
        encoding: File encoding (default utf-8)
        max_bytes: Rotation size in bytes (optional, no rotation)
        backup_count: Backups kept when rotating (default 5)
        format: "text" (default) or "json"
        template: TextFormatter template
        min_level: Lowest enabled level (optional, DEBUG)
    """

    def __init__(self, configuration: Configuration):
        super().__init__(configuration)
        self.filepath = Path(config_helper.get_string_attribute(configuration, FILE, True))
        self.encoding = config_helper.get_string_attribute(configuration, ENCODING, False) or "utf-8"
        self.max_bytes: Optional[int] = config_helper.get_int_attribute(configuration, MAX_BYTES, None)
        self.backup_count = config_helper.get_int_attribute(
            configuration, BACKUP_COUNT, DEFAULT_BACKUP_COUNT
        )
        if self.max_bytes is not None and self.max_bytes <= 0:
            raise ConfigError(f"'{MAX_BYTES}' must be positive, got {self.max_bytes}")
        self.formatter = load_formatter(configuration)
        self._file = None

        try:
            self._open()
        except (OSError, LookupError) as e:
            raise ConfigError(f"Unable to open log file '{self.filepath}'") from e

    @classmethod
    def initialize_zero_configuration(
        cls, option: ZeroConfigurationOption, configuration: Configuration
    ) -> Configuration:
        """
        Fill in file location and rotation for a preset.

        Test writes to test_files/log.txt and Component to log.txt, both
        without rotation. The remaining presets rotate logs/log.txt;
        Certification keeps every backup, the others keep 30.
        """
        config_helper.validate_not_none(configuration, "configuration")
        defaults = {}
        if option == ZeroConfigurationOption.TEST:
            defaults[FILE] = "test_files/log.txt"
        elif option == ZeroConfigurationOption.COMPONENT:
            defaults[FILE] = "log.txt"
        else:
            defaults[FILE] = "logs/log.txt"
            defaults[MAX_BYTES] = PRESET_MAX_BYTES
            if option == ZeroConfigurationOption.CERTIFICATION:
                defaults[BACKUP_COUNT] = -1
            else:
                defaults[BACKUP_COUNT] = PRESET_BACKUP_COUNT

        if option.threshold is not None:
            defaults[MIN_LEVEL] = option.threshold.name
        return configuration.with_defaults(defaults)

    @property
    def rotating(self) -> bool:
        return self.max_bytes is not None

    def backup_path(self, index: int) -> Path:
        """Path of the index-th backup."""
        return self.filepath.with_name(f"{self.filepath.name}.{index}")

    def _open(self):
        """Open log file."""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.filepath, "a", encoding=self.encoding)

    def _should_rotate(self) -> bool:
        """Check if file should be rotated."""
        if not self._file or not self.rotating:
            return False
        return self._file.tell() >= self.max_bytes

    def _last_backup_index(self) -> int:
        if self.backup_count >= 0:
            return self.backup_count
        index = 0
        while self.backup_path(index + 1).exists():
            index += 1
        return index + 1

    def _do_rotate(self):
        """
        Perform file rotation.

        The log file is reopened even when moving files fails; writing then
        continues in the un-rotated file and rotation is retried on the next
        write.
        """
        if self._file:
            self._file.close()
            self._file = None

        try:
            if self.backup_count == 0:
                self.filepath.unlink()
            else:
                # Shift existing backups up by one, dropping the oldest
                for i in range(self._last_backup_index() - 1, 0, -1):
                    src = self.backup_path(i)
                    if src.exists():
                        src.replace(self.backup_path(i + 1))
                self.filepath.replace(self.backup_path(1))
        except OSError as e:
            _log.warning("Unable to rotate log file '%s': %s", self.filepath, e)
        finally:
            self._open()

    def _write(self, entry: LogEntry) -> None:
        if self._file is None:
            self._open()
        elif self._should_rotate():
            self._do_rotate()
        self._file.write(self.formatter.format(entry) + "\n")

    def flush(self) -> None:
        """Flush file buffer."""
        with self._lock:
            if self._file:
                self._file.flush()

    def _close(self) -> None:
        if self._file:
            self._file.close()
            self._file = None
