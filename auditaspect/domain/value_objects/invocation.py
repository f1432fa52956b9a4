"""Call-site descriptor and per-call invocation context.

InvocationSite identifies what is being called: the runtime type of the
target and the method name. InvocationContext is created once per intercepted
call, carries arguments and outcome, and is discarded once the last phase
has been dispatched.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from time import perf_counter_ns
from types import MappingProxyType
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(frozen=True, slots=True, kw_only=True)
class InvocationSite:
    """Descriptor of an intercepted call site.

    Attributes:
        method_name: Name the callable was defined under.
        target_type: Runtime class of the receiving instance, or ``None`` for
            module-level functions.
        function: The woven callable. Used for configuration lookup when
            there is no target type.
    """

    method_name: str
    target_type: type | None = None
    function: Callable[..., Any] | None = None

    @property
    def key(self) -> str:
        """Readable identifier formatted ``Owner#method_name``."""
        if self.target_type is not None:
            owner = self.target_type.__name__
        else:
            owner = getattr(self.function, "__module__", None) or "<unknown>"
        return f"{owner}#{self.method_name}"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvocationContext:
    """State of one intercepted call, handed to every handler.

    Attributes:
        site: The call site being intercepted.
        instance: Receiving instance for bound methods, ``None`` otherwise.
        args: Positional arguments (excluding the instance).
        kwargs: Keyword arguments (read-only view).
        invocation_id: Unique id (UUIDv7, time-ordered) for correlating the
            phases of one call.
        started_at_ns: ``perf_counter_ns()`` taken at interception.
        return_value: Set for AFTER_RETURNING.
        error: Set for AFTER_THROWING.

    Example:
        >>> ctx = InvocationContext(site=InvocationSite(method_name="ok"))
        >>> done = ctx.returned("ABC")
        >>> done.return_value, ctx.return_value
        ('ABC', None)
    """

    site: InvocationSite
    instance: Any = None
    args: tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = field(default_factory=dict)
    invocation_id: UUID = field(default_factory=uuid7)
    started_at_ns: int = field(default_factory=perf_counter_ns)
    return_value: Any = None
    error: Exception | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kwargs, MappingProxyType):
            object.__setattr__(self, "kwargs", MappingProxyType(dict(self.kwargs)))

    @property
    def target(self) -> str:
        return self.site.key

    @property
    def elapsed_ns(self) -> int:
        """Nanoseconds since interception."""
        return perf_counter_ns() - self.started_at_ns

    def returned(self, value: Any) -> "InvocationContext":
        """Copy of this context carrying the call's return value."""
        return replace(self, return_value=value)

    def raised(self, error: Exception) -> "InvocationContext":
        """Copy of this context carrying the call's error."""
        return replace(self, error=error)
