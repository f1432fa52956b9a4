"""Handler-name resolution and phase dispatch."""

from auditaspect.infrastructure.dispatch.configuration_resolver import (
    ConfigurationResolver,
)
from auditaspect.infrastructure.dispatch.phase_dispatcher import PhaseDispatcher

__all__ = ["ConfigurationResolver", "PhaseDispatcher"]
