"""Unit tests for ConsoleAdapter (structured console logging).

Tests cover:
- All LoggerProtocol methods (debug, info, warning, error, critical)
- Error details on error/critical
- Context binding
- Renderer and level selection

Architecture:
- Unit tests with mocked structlog
- NO real logging dependencies
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from auditaspect.infrastructure.logging.console_adapter import ConsoleAdapter

STRUCTLOG = "auditaspect.infrastructure.logging.console_adapter.structlog"


@pytest.mark.unit
class TestConsoleAdapterLogging:
    """Test ConsoleAdapter logging methods."""

    @pytest.mark.parametrize("method", ["debug", "info", "warning"])
    def test_logs_message_with_context(self, method):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            getattr(adapter, method)("audit_phase_started", phase="BEFORE", handlers_count=2)

            getattr(mock_logger, method).assert_called_once_with(
                "audit_phase_started",
                phase="BEFORE",
                handlers_count=2,
            )

    @pytest.mark.parametrize("method", ["error", "critical"])
    def test_error_details_added(self, method):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            getattr(adapter, method)(
                "audit_dispatch_failed", error=ValueError("bad"), phase="BEFORE"
            )

            getattr(mock_logger, method).assert_called_once_with(
                "audit_dispatch_failed",
                phase="BEFORE",
                error_type="ValueError",
                error_message="bad",
            )

    def test_error_without_exception(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            ConsoleAdapter().error("audit_dispatch_failed", phase="BEFORE")

            mock_logger.error.assert_called_once_with(
                "audit_dispatch_failed", phase="BEFORE"
            )


@pytest.mark.unit
class TestConsoleAdapterBinding:
    """Test context binding."""

    def test_bind_returns_new_adapter(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            bound_logger = MagicMock()
            mock_logger.bind.return_value = bound_logger
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            bound = adapter.bind(audit_handler="loggerAudit")
            bound.info("audit_call_started")

            assert bound is not adapter
            mock_logger.bind.assert_called_once_with(audit_handler="loggerAudit")
            bound_logger.info.assert_called_once_with("audit_call_started")
            mock_logger.info.assert_not_called()

    def test_with_context_alias(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            ConsoleAdapter().with_context(target="DemoService#ok")

            mock_logger.bind.assert_called_once_with(target="DemoService#ok")


@pytest.mark.unit
class TestConsoleAdapterConfiguration:
    """Test renderer and level selection."""

    def test_json_renderer_when_requested(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter(use_json=True)

            processors = mock_structlog.configure.call_args[1]["processors"]
            assert processors[-1] is mock_structlog.processors.JSONRenderer.return_value

    def test_console_renderer_by_default(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter()

            processors = mock_structlog.configure.call_args[1]["processors"]
            assert processors[-1] is mock_structlog.dev.ConsoleRenderer.return_value

    def test_level_passed_to_filtering_logger(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter(level=logging.DEBUG)

            mock_structlog.make_filtering_bound_logger.assert_called_once_with(
                logging.DEBUG
            )
