"""Handler registry protocol (port).

A read-only lookup surface from handler name to handler capability. The
registry is populated once at startup by the composition root and never
mutated by the dispatcher.

Implementations:
    - InMemoryHandlerRegistry: auditaspect/infrastructure/registry/
"""

from collections.abc import Iterator
from typing import Protocol

from auditaspect.domain.protocols.audit_handler_protocol import AuditHandler


class HandlerRegistryProtocol(Protocol):
    """Protocol for handler registries.

    Key Requirements:
        1. ``lookup`` returns ``None`` for unknown names, never raises.
        2. Safe for concurrent lookups from many threads (frozen after build).
    """

    def lookup(self, name: str) -> AuditHandler | None:
        """Return the handler registered under ``name`` or ``None``."""
        ...

    def names(self) -> tuple[str, ...]:
        """Return registered handler names in registration order."""
        ...

    def __contains__(self, name: object) -> bool: ...

    def __iter__(self) -> Iterator[str]: ...

    def __len__(self) -> int: ...
