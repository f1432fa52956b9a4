"""In-memory handler registry.

Implements HandlerRegistryProtocol over a name -> handler mapping that is
copied and frozen at construction (construct-then-freeze). Lookups never
mutate state, so one instance is shared by every invocation thread without
locking.

Usage:
    >>> registry = InMemoryHandlerRegistry(
    ...     {"dbAudit": DbAuditHandler(), "loggerAudit": LoggingAuditHandler(logger)}
    ... )
    >>> registry.lookup("dbAudit")
    <DbAuditHandler ...>
    >>> registry.lookup("missing") is None
    True
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from auditaspect.domain.protocols.audit_handler_protocol import AuditHandler


class InMemoryHandlerRegistry:
    """Frozen name -> handler lookup.

    Thread Safety:
        - Read-only after __init__; safe for concurrent lookups.
        - Mutating the mapping passed in has no effect (it is copied).

    Raises:
        ValueError: If a name is blank or a value does not implement the
            three phase operations of AuditHandler.
    """

    __slots__ = ("_handlers",)

    def __init__(self, handlers: Mapping[str, AuditHandler] | None = None) -> None:
        """Copy, validate and freeze the handler mapping.

        Args:
            handlers: Handler name to handler instance. ``None`` builds an
                empty registry (every configured name is then unknown).

        Raises:
            ValueError: On blank names or non-conforming handler objects.
        """
        snapshot: dict[str, AuditHandler] = dict(handlers or {})
        for name, handler in snapshot.items():
            if not isinstance(name, str) or not name.strip():
                raise ValueError(f"Audit handler names must be non-empty strings: {name!r}")
            if not isinstance(handler, AuditHandler):
                raise ValueError(
                    f"Audit handler '{name}' ({type(handler).__name__}) must implement "
                    "before(), after_returning() and after_throwing()"
                )
        self._handlers: Mapping[str, AuditHandler] = MappingProxyType(snapshot)

    def lookup(self, name: str) -> AuditHandler | None:
        """Return the handler registered under ``name`` or ``None``."""
        return self._handlers.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"InMemoryHandlerRegistry(names={list(self._handlers)!r})"
