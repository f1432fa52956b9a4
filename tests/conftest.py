"""Pytest configuration for audit engine tests.

This configuration ensures:
1. Container singletons and AUDIT_* settings never leak between tests
2. Loggers are MagicMocks unless a test opts into a real adapter
3. Weavers under test use an explicit dispatcher, not the container
"""

import os
from unittest.mock import MagicMock

import pytest

from auditaspect.core.container import reset_engine
from auditaspect.infrastructure.dispatch import ConfigurationResolver, PhaseDispatcher
from auditaspect.infrastructure.registry import InMemoryHandlerRegistry
from auditaspect.interception import AuditWeaver
from tests.utils.handlers import RecordingHandler


@pytest.fixture(autouse=True)
def isolated_audit_env(monkeypatch):
    """Strip AUDIT_* variables and reset cached singletons around each test."""
    for key in list(os.environ):
        if key.startswith("AUDIT_"):
            monkeypatch.delenv(key, raising=False)
    reset_engine()
    yield
    reset_engine()


@pytest.fixture
def mock_logger():
    """MagicMock standing in for LoggerProtocol."""
    return MagicMock()


@pytest.fixture
def journal():
    """Shared list RecordingHandlers append to, in call order."""
    return []


@pytest.fixture
def recording_handlers(journal):
    """Factory: ``recording_handlers("a", "b")`` -> {"a": ..., "b": ...}."""

    def factory(*names: str) -> dict[str, RecordingHandler]:
        return {name: RecordingHandler(name, journal) for name in names}

    return factory


@pytest.fixture
def make_dispatcher(mock_logger):
    """Factory building a PhaseDispatcher over the given handlers."""

    def factory(handlers=None, *, timing_enabled: bool = True) -> PhaseDispatcher:
        return PhaseDispatcher(
            registry=InMemoryHandlerRegistry(handlers or {}),
            resolver=ConfigurationResolver(),
            logger=mock_logger,
            timing_enabled=timing_enabled,
        )

    return factory


@pytest.fixture
def make_weaver(mock_logger):
    """Factory building an AuditWeaver bound to a fixed dispatcher."""

    def factory(dispatcher: PhaseDispatcher) -> AuditWeaver:
        return AuditWeaver(
            dispatcher_provider=lambda: dispatcher,
            logger_provider=lambda: mock_logger,
        )

    return factory
