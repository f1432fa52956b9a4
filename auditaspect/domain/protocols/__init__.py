"""Domain protocols (ports) implemented by infrastructure adapters."""

from auditaspect.domain.protocols.audit_handler_protocol import (
    AuditHandler,
    BaseAuditHandler,
)
from auditaspect.domain.protocols.handler_registry_protocol import (
    HandlerRegistryProtocol,
)
from auditaspect.domain.protocols.logger_protocol import LoggerProtocol

__all__ = [
    "AuditHandler",
    "BaseAuditHandler",
    "HandlerRegistryProtocol",
    "LoggerProtocol",
]
