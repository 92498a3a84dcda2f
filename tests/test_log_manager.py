"""Tests for the logger construction pipeline and backend registry"""

import pytest
import threading
from unittest.mock import Mock

from logging_wrapper import (
    ArgumentError,
    BackendRegistry,
    ConfigError,
    Configuration,
    ConfiguredLogger,
    Level,
    LogManager,
    Logger,
    UnknownNamedMessageError,
    ZeroConfigurationOption,
    create_logger,
    register_backend,
)
from logging_wrapper.backends import ConsoleLogger, MemoryLogger
from logging_wrapper.core.log_manager import DEFAULT_SECTION
from logging_wrapper.core.registry import default_registry
from logging_wrapper.decorators import ExceptionSafeLogger, LevelFilteredLogger


@pytest.fixture
def registry():
    """Registry with the memory backend registered as Mem."""
    registry = BackendRegistry()
    registry.register("Mem", MemoryLogger)
    return registry


def backend_of(logger: Logger) -> Logger:
    """Innermost logger of a decorator chain."""
    while hasattr(logger, "underlying_logger"):
        logger = logger.underlying_logger
    return logger


class TestBackendRegistry:
    """Test backend registration."""

    def test_register_and_resolve(self):
        registry = BackendRegistry()
        registry.register("memory", MemoryLogger, "MemoryLogger")

        assert registry.resolve("memory") is MemoryLogger
        assert registry.resolve("MemoryLogger") is MemoryLogger
        assert registry.resolve("console") is None
        assert "memory" in registry
        assert sorted(registry.names()) == ["MemoryLogger", "memory"]

    def test_duplicate_name(self, registry):
        with pytest.raises(ValueError):
            registry.register("Mem", ConsoleLogger)

    def test_duplicate_alias_registers_nothing(self, registry):
        with pytest.raises(ValueError):
            registry.register("other", ConsoleLogger, "Mem")
        assert "other" not in registry

    def test_empty_name(self):
        with pytest.raises(ValueError):
            BackendRegistry().register("", MemoryLogger)

    def test_factory_must_be_callable(self):
        with pytest.raises(TypeError):
            BackendRegistry().register("memory", "MemoryLogger")

    def test_unregister(self, registry):
        registry.unregister("Mem")
        registry.unregister("never registered")
        assert "Mem" not in registry

    def test_copy_is_independent(self, registry):
        clone = registry.copy()
        clone.register("console", ConsoleLogger)
        assert "console" not in registry
        assert clone.resolve("Mem") is MemoryLogger

    def test_register_backend_decorator(self):
        registry = BackendRegistry()

        @register_backend("custom", "custom-alias", registry=registry)
        class CustomLogger(MemoryLogger):
            pass

        assert registry.resolve("custom") is CustomLogger
        assert registry.resolve("custom-alias") is CustomLogger
        assert "custom" not in default_registry

    def test_default_registry_has_builtin_backends(self):
        for name in ("memory", "console", "file", "stdlib", "remote"):
            assert name in default_registry
        assert default_registry.resolve("logging_wrapper.backends.MemoryLogger") is MemoryLogger


class TestCreateLogger:
    """Test the construction pipeline."""

    def test_none_configuration(self):
        with pytest.raises(ArgumentError):
            LogManager().create_logger(None)

    def test_filtered_self_wrapped_logger(self, registry):
        config = Configuration.from_dict("svc", {
            "logger_class": "Mem",
            "logger_name": "svc",
            "filtered_levels": ["DEBUG"],
        })

        logger = LogManager(registry).create_logger(config)

        assert isinstance(logger, ExceptionSafeLogger)
        assert isinstance(logger.underlying_logger, LevelFilteredLogger)
        assert logger.exception_logger is logger.underlying_logger

        logger.debug("dropped")
        logger.info("kept")
        assert backend_of(logger).messages == ["kept"]

    def test_log_off_never_reaches_backend(self, registry):
        config = Configuration.from_dict("svc", {
            "logger_class": "Mem", "logger_name": "svc", "filtered_levels": ["INFO"],
        })
        logger = LogManager(registry).create_logger(config)
        logger.log(Level.OFF, "msg")
        assert backend_of(logger).entries == []

    def test_unknown_identifier_is_argument_error(self, registry):
        config = Configuration.from_dict("svc", {
            "logger_class": "Mem", "logger_name": "svc", "propagate_exceptions": True,
        })
        logger = LogManager(registry).create_logger(config)
        with pytest.raises(UnknownNamedMessageError):
            logger.log_named_message("missing")

    def test_no_filter_without_filtered_levels(self, registry):
        config = Configuration.from_dict("svc", {"logger_class": "Mem", "logger_name": "svc"})
        logger = LogManager(registry).create_logger(config)
        assert isinstance(logger.underlying_logger, MemoryLogger)

    def test_propagate_exceptions(self, registry):
        config = Configuration.from_dict("svc", {
            "logger_class": "Mem", "logger_name": "svc", "propagate_exceptions": "true",
        })
        logger = LogManager(registry).create_logger(config)
        assert isinstance(logger, MemoryLogger)

    def test_propagate_exceptions_false(self, registry):
        config = Configuration.from_dict("svc", {
            "logger_class": "Mem", "logger_name": "svc", "propagate_exceptions": False,
        })
        assert isinstance(LogManager(registry).create_logger(config), ExceptionSafeLogger)

    def test_invalid_propagate_exceptions(self, registry):
        config = Configuration.from_dict("svc", {
            "logger_class": "Mem", "logger_name": "svc", "propagate_exceptions": "yes",
        })
        with pytest.raises(ConfigError):
            LogManager(registry).create_logger(config)

    def test_missing_logger_class(self, registry):
        config = Configuration.from_dict("svc", {"logger_name": "svc"})
        with pytest.raises(ConfigError):
            LogManager(registry).create_logger(config)

    def test_unknown_backend(self, registry):
        config = Configuration.from_dict("svc", {"logger_class": "Nope", "logger_name": "svc"})
        with pytest.raises(ConfigError):
            LogManager(registry).create_logger(config)

    def test_backend_config_error_propagates(self, registry):
        config = Configuration.from_dict("svc", {"logger_class": "Mem"})
        with pytest.raises(ConfigError, match="logger_name"):
            LogManager(registry).create_logger(config)

    def test_backend_failure_wrapped(self):
        registry = BackendRegistry()
        registry.register("broken", Mock(side_effect=RuntimeError("no")))
        config = Configuration.from_dict("svc", {"logger_class": "broken"})

        with pytest.raises(ConfigError) as exc_info:
            LogManager(registry).create_logger(config)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_factory_must_return_logger(self):
        registry = BackendRegistry()
        registry.register("odd", Mock(return_value=object()))
        config = Configuration.from_dict("svc", {"logger_class": "odd"})
        with pytest.raises(ConfigError):
            LogManager(registry).create_logger(config)

    @pytest.mark.parametrize("levels", [["DEBUG", "LOUD"], ["DEBUG", "debug"]])
    def test_invalid_filtered_levels_disposes_backend(self, levels):
        backend = Mock(spec=Logger)
        registry = BackendRegistry()
        registry.register("mock", Mock(return_value=backend))
        config = Configuration.from_dict("svc", {"logger_class": "mock", "filtered_levels": levels})

        with pytest.raises(ConfigError):
            LogManager(registry).create_logger(config)
        backend.dispose.assert_called_once_with()

    def test_logger_module_import_failure(self, registry):
        config = Configuration.from_dict("svc", {
            "logger_class": "Mem", "logger_name": "svc", "logger_module": "no_such_module_xyz",
        })
        with pytest.raises(ConfigError):
            LogManager(registry).create_logger(config)

    def test_logger_module_registers_backend(self, tmp_path, monkeypatch):
        module = tmp_path / "plugin_backend_xyz.py"
        module.write_text(
            "from logging_wrapper.backends import MemoryLogger\n"
            "from logging_wrapper import register_backend\n"
            "\n"
            "@register_backend('plugin-xyz')\n"
            "class PluginLogger(MemoryLogger):\n"
            "    pass\n"
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        config = Configuration.from_dict("svc", {
            "logger_class": "plugin-xyz",
            "logger_name": "svc",
            "logger_module": "plugin_backend_xyz",
            "propagate_exceptions": True,
        })

        try:
            logger = create_logger(config)
            assert type(logger).__name__ == "PluginLogger"
        finally:
            default_registry.unregister("plugin-xyz")

    def test_module_not_registering_backend(self, registry):
        config = Configuration.from_dict("svc", {
            "logger_class": "Missing", "logger_name": "svc", "logger_module": "json",
        })
        with pytest.raises(ConfigError, match="json"):
            LogManager(registry).create_logger(config)

    def test_configuration_unchanged_and_loggers_independent(self, registry):
        config = Configuration.from_dict("svc", {
            "logger_class": "Mem",
            "logger_name": "svc",
            "filtered_levels": ["DEBUG"],
            "ExceptionLogger": {"logger_class": "Mem", "logger_name": "errors"},
        })
        snapshot = config.to_dict()
        manager = LogManager(registry)

        first = manager.create_logger(config)
        second = manager.create_logger(config)

        assert config.to_dict() == snapshot
        assert first is not second
        first.info("only first")
        assert backend_of(second).entries == []

    def test_module_function_uses_default_registry(self):
        config = Configuration.from_dict("svc", {"logger_class": "memory", "logger_name": "svc"})
        logger = create_logger(config)
        assert isinstance(backend_of(logger), MemoryLogger)

    def test_module_function_with_registry(self, registry):
        config = Configuration.from_dict("svc", {"logger_class": "Mem", "logger_name": "svc"})
        assert isinstance(backend_of(create_logger(config, registry)), MemoryLogger)


class TestExceptionLogger:
    """Test the dedicated exception logger."""

    def make_config(self, **child):
        child_data = {"logger_class": "Mem", "logger_name": "errors"}
        child_data.update(child)
        return Configuration.from_dict("svc", {
            "logger_class": "Mem",
            "logger_name": "svc",
            "ExceptionLogger": child_data,
        })

    def test_failures_go_to_exception_logger(self, registry):
        logger = LogManager(registry).create_logger(self.make_config())
        logger.info("{0} {1}", "only one")

        assert backend_of(logger).entries == []
        errors = backend_of(logger.exception_logger)
        assert len(errors.entries) == 1
        assert errors.entries[0].level == Level.WARN
        assert "MessageFormattingError" in errors.messages[0]

    def test_exception_logger_default_level_warn(self, registry):
        logger = LogManager(registry).create_logger(self.make_config())
        assert logger.exception_logger.default_level == Level.WARN

    def test_explicit_default_level_kept(self, registry):
        logger = LogManager(registry).create_logger(self.make_config(default_level="ERROR"))
        assert logger.exception_logger.default_level == Level.ERROR

    def test_exception_logger_is_itself_safe(self, registry):
        logger = LogManager(registry).create_logger(self.make_config())
        assert isinstance(logger.exception_logger, ExceptionSafeLogger)

    def test_invalid_exception_logger(self, registry):
        with pytest.raises(ConfigError, match="exception logger"):
            LogManager(registry).create_logger(self.make_config(logger_class="Nope"))

    def test_dispose_disposes_exception_logger(self, registry):
        logger = LogManager(registry).create_logger(self.make_config())
        logger.dispose()
        assert backend_of(logger).closed
        assert backend_of(logger.exception_logger).closed


class ZeroConfigLogger(ConfiguredLogger):
    """Backend recording which preset it received."""

    seen = []

    @classmethod
    def initialize_zero_configuration(cls, option, configuration):
        cls.seen.append(option)
        return configuration.with_defaults({"default_level": option.threshold.name})

    def is_level_enabled(self, level):
        return level != Level.OFF

    def log(self, level, message, *params):
        self._render(level, message, params)

    def dispose(self):
        pass


class TestZeroConfiguration:
    """Test zero-configuration presets."""

    @pytest.fixture
    def zc_registry(self):
        ZeroConfigLogger.seen = []
        registry = BackendRegistry()
        registry.register("zc", ZeroConfigLogger)
        return registry

    def test_applied_on_default_section(self, zc_registry):
        config = Configuration(DEFAULT_SECTION, {
            "logger_class": "zc", "logger_name": "app", "default_config": "release",
        })
        logger = LogManager(zc_registry).create_logger(config)

        assert ZeroConfigLogger.seen == [ZeroConfigurationOption.RELEASE]
        assert logger.default_level == Level.WARN

    def test_explicit_settings_win(self, zc_registry):
        config = Configuration(DEFAULT_SECTION, {
            "logger_class": "zc", "logger_name": "app",
            "default_config": "Release", "default_level": "FATAL",
        })
        assert LogManager(zc_registry).create_logger(config).default_level == Level.FATAL

    def test_ignored_on_other_sections(self, zc_registry):
        config = Configuration("svc", {
            "logger_class": "zc", "logger_name": "app", "default_config": "Release",
        })
        logger = LogManager(zc_registry).create_logger(config)

        assert ZeroConfigLogger.seen == []
        assert logger.default_level == Level.DEBUG

    def test_invalid_preset_ignored_on_other_sections(self, zc_registry):
        config = Configuration("svc", {
            "logger_class": "zc", "logger_name": "app", "default_config": "Nope",
        })
        LogManager(zc_registry).create_logger(config)

    def test_invalid_preset(self, zc_registry):
        config = Configuration(DEFAULT_SECTION, {
            "logger_class": "zc", "logger_name": "app", "default_config": "Nope",
        })
        with pytest.raises(ConfigError):
            LogManager(zc_registry).create_logger(config)

    def test_initializer_failure(self, zc_registry):
        # Test has no threshold, so the initializer fails on None.name
        config = Configuration(DEFAULT_SECTION, {
            "logger_class": "zc", "logger_name": "app", "default_config": "Test",
        })
        with pytest.raises(ConfigError):
            LogManager(zc_registry).create_logger(config)

    def test_factory_without_initializer(self):
        registry = BackendRegistry()
        registry.register("plain", lambda configuration: MemoryLogger(configuration))
        config = Configuration(DEFAULT_SECTION, {
            "logger_class": "plain", "logger_name": "app", "default_config": "Test",
        })
        with pytest.raises(ConfigError):
            LogManager(registry).create_logger(config)

    def test_console_release_preset(self, registry):
        registry.register("console", ConsoleLogger)
        config = Configuration(DEFAULT_SECTION, {
            "logger_class": "console", "logger_name": "app", "default_config": "Release",
        })
        logger = LogManager(registry).create_logger(config)
        assert backend_of(logger).min_level == Level.WARN

    def test_create_default_logger(self, monkeypatch):
        monkeypatch.setenv("LOGGING_WRAPPER_DEFAULT_BACKEND", "memory")
        logger = LogManager().create_default_logger()

        assert isinstance(backend_of(logger), MemoryLogger)
        assert logger.log_name
        logger.info("ready")
        assert backend_of(logger).messages == ["ready"]

    def test_create_default_logger_console(self, monkeypatch, capsys):
        monkeypatch.delenv("LOGGING_WRAPPER_DEFAULT_BACKEND", raising=False)
        logger = LogManager().create_default_logger()

        # Component preset: INFO and above
        logger.debug("hidden")
        logger.info("shown")

        captured = capsys.readouterr()
        assert "shown" in captured.err
        assert "hidden" not in captured.err


class TestConcurrency:
    """Test loggers shared between threads."""

    THREADS = 8
    MESSAGES = 200

    def run_threads(self, target):
        barrier = threading.Barrier(self.THREADS)

        def worker(n):
            barrier.wait()
            target(n)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(self.THREADS)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

    def test_shared_chain_loses_nothing(self, registry):
        config = Configuration.from_dict("svc", {
            "logger_class": "Mem",
            "logger_name": "svc",
            "default_level": "WARN",
            "filtered_levels": ["DEBUG"],
        })
        logger = LogManager(registry).create_logger(config)
        enabled = []

        def write(n):
            for i in range(self.MESSAGES):
                logger.info("t{0}-{1}", n, i)
                logger.debug("filtered {0}", i)
                enabled.append(logger.is_level_enabled(Level.DEBUG))
            logger.info("{0} {1}", "only one")

        self.run_threads(write)

        messages = backend_of(logger).messages
        expected = {f"t{n}-{i}" for n in range(self.THREADS) for i in range(self.MESSAGES)}
        written = [m for m in messages if m.startswith("t")]
        failures = [m for m in messages if "MessageFormattingError" in m]

        assert len(written) == len(expected)
        assert set(written) == expected
        assert len(failures) == self.THREADS
        assert len(messages) == len(written) + len(failures)
        assert not any(enabled)

    def test_concurrent_create_logger(self):
        loggers = {}
        lock = threading.Lock()

        def build(n):
            config = Configuration.from_dict(f"svc{n}", {
                "logger_class": "memory",
                "logger_name": f"svc{n}",
                "filtered_levels": ["DEBUG"],
            })
            logger = create_logger(config)
            logger.info("from {0}", n)
            with lock:
                loggers[n] = logger

        self.run_threads(build)

        assert len(loggers) == self.THREADS
        backends = {id(backend_of(logger)) for logger in loggers.values()}
        assert len(backends) == self.THREADS
        for n, logger in loggers.items():
            assert logger.log_name == f"svc{n}"
            assert backend_of(logger).messages == [f"from {n}"]
