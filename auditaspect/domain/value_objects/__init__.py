"""Domain value objects."""

from auditaspect.domain.value_objects.audit_config import (
    AUDIT_CONFIG_ATTR,
    AuditConfig,
    attach_config,
    declared_config,
)
from auditaspect.domain.value_objects.invocation import (
    InvocationContext,
    InvocationSite,
)
from auditaspect.domain.value_objects.phase_report import HandlerOutcome, PhaseReport

__all__ = [
    "AUDIT_CONFIG_ATTR",
    "AuditConfig",
    "attach_config",
    "declared_config",
    "InvocationSite",
    "InvocationContext",
    "HandlerOutcome",
    "PhaseReport",
]
