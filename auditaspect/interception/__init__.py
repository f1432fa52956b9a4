"""Interception layer: the ``@auditable`` decorator and its weaver."""

from auditaspect.interception.audited_callable import AuditedCallable
from auditaspect.interception.weaver import AuditWeaver, auditable

__all__ = ["AuditedCallable", "AuditWeaver", "auditable"]
