"""Tests for logging and tracing setup."""

import logging
from unittest.mock import patch

import pytest
from opentelemetry.sdk.trace import TracerProvider

from dav_objectstore.core import observability, settings
from dav_objectstore.schemas import LogLevel


@pytest.fixture
def restore_settings(monkeypatch):
    """Let a test change settings; the package log level is reset afterwards."""
    yield monkeypatch
    monkeypatch.undo()
    observability.setup_logging()


class TestLoggingSetup:
    """Test the package logger gate."""

    @pytest.mark.parametrize(
        "name, expected",
        [("DEBUG", logging.DEBUG), ("info", logging.INFO), ("bogus", logging.WARNING)],
    )
    def test_settings_level_gates_package_logger(self, restore_settings, name, expected):
        """Test the process default level applies to the package logger."""
        restore_settings.setattr(settings, "log_level", name)

        observability.setup_logging()

        assert logging.getLogger("dav_objectstore").level == expected

    def test_store_level_replaces_default(self, restore_settings):
        """Test apply_log_level overrides the process default."""
        restore_settings.setattr(settings, "log_level", "DEBUG")
        observability.setup_logging()

        observability.apply_log_level(LogLevel.WARN)

        logger = logging.getLogger("dav_objectstore.objectstorage.store")
        assert not logger.isEnabledFor(logging.INFO)
        assert logger.isEnabledFor(logging.WARNING)


class TestTracingSetup:
    """Test opt-in tracing."""

    def test_disabled_by_default(self):
        """Test no provider is installed unless enabled."""
        with patch.object(observability.trace, "set_tracer_provider") as set_provider:
            observability.setup_tracing()
        set_provider.assert_not_called()

    def test_enabled(self, restore_settings):
        """Test the provider carries the configured service name."""
        restore_settings.setattr(settings, "otel_enabled", True)
        restore_settings.setattr(settings, "otel_service_name", "backup-store")

        with patch.object(observability.trace, "set_tracer_provider") as set_provider:
            observability.setup_tracing()

        provider = set_provider.call_args.args[0]
        assert isinstance(provider, TracerProvider)
        assert provider.resource.attributes["service.name"] == "backup-store"
        provider.shutdown()
