"""Reference audit handlers."""

from auditaspect.infrastructure.handlers.in_memory_audit_handler import (
    AuditRecord,
    InMemoryAuditHandler,
)
from auditaspect.infrastructure.handlers.logging_audit_handler import (
    LoggingAuditHandler,
)

__all__ = ["AuditRecord", "InMemoryAuditHandler", "LoggingAuditHandler"]
