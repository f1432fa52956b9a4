"""Weaving of functions, methods and classes.

The weaver is the interception trigger: it calls the phase dispatcher before
entry, after a normal return (with the return value) and after an uncaught
``Exception`` (with the error), never both of the latter two for one call.
The business result or error passes through untouched; the same exception
object is re-raised.

Configuration surface:
    - ``@auditable("a", "b")`` on a function or method: method-level config.
    - ``@auditable("a", "b")`` on a class: type-level config, and every public
      function defined in the class body is woven.
    - Subclasses of a class holding woven callables are woven when they are
      created, so overrides keep the handlers they inherit.

Usage:
    >>> @auditable("dbAudit", "inMemoryAudit")
    ... class DemoService:
    ...     def ok(self, s: str) -> str:
    ...         return s.upper()
    ...
    ...     @auditable("inMemoryAudit")
    ...     def only_memory_sink(self) -> None: ...
"""

from collections.abc import Callable, Mapping
from contextlib import suppress
from functools import wraps
from inspect import isfunction
from typing import Any, TypeVar

from auditaspect.core.container import get_dispatcher, get_logger
from auditaspect.domain.enums import Phase
from auditaspect.domain.protocols import LoggerProtocol
from auditaspect.domain.value_objects import (
    AuditConfig,
    InvocationContext,
    InvocationSite,
    attach_config,
)
from auditaspect.infrastructure.dispatch import PhaseDispatcher
from auditaspect.interception.audited_callable import AuditedCallable

T = TypeVar("T")

SUBCLASS_HOOK_ATTR = "__audit_subclass_weaver__"


class AuditWeaver:
    """Turns decorated functions and classes into audited call sites.

    The dispatcher is looked up on every call through ``dispatcher_provider``
    so that decoration (import time) does not depend on wiring (startup).

    Args:
        dispatcher_provider: Returns the dispatcher to use; defaults to the
            container singleton.
        logger_provider: Returns the logger for engine faults; defaults to the
            container singleton.
    """

    def __init__(
        self,
        dispatcher_provider: Callable[[], PhaseDispatcher] | None = None,
        logger_provider: Callable[[], LoggerProtocol] | None = None,
    ) -> None:
        self._dispatcher_provider = dispatcher_provider or get_dispatcher
        self._logger_provider = logger_provider or get_logger

    def auditable(self, *handlers: str) -> Callable[[T], T]:
        """Decorator attaching handler names to a function, method or class.

        Args:
            *handlers: Handler names in notification order. Duplicates are
                dropped (first occurrence kept). No names on a method means
                "use the type-level configuration".

        Raises:
            TypeError: If a name is not a string, or the decorated object is
                not a function or class.
        """
        config = AuditConfig.of(handlers)

        def decorator(target: Any) -> Any:
            if isinstance(target, type):
                return self.weave_class(target, config)
            if isinstance(target, AuditedCallable):
                attach_config(target, config)
                return target
            if isinstance(target, (staticmethod, classmethod, property)):
                raise TypeError(
                    f"@auditable supports plain functions and methods, not {type(target).__name__}"
                )
            if not callable(target):
                raise TypeError(f"@auditable cannot decorate {type(target).__name__}")
            return AuditedCallable(target, weaver=self, config=config)

        return decorator

    def weave_class(self, cls: type[T], config: AuditConfig) -> type[T]:
        """Attach type-level config and weave public functions of ``cls``.

        Names starting with ``_``, static methods, class methods and
        properties are left alone; callables already woven by a method-level
        decorator are kept as they are. Subclasses defined later are woven
        the same way when they are created (see watch_subclasses).
        """
        attach_config(cls, config)
        self.weave_members(cls)
        self.watch_subclasses(cls)
        return cls

    def weave_members(self, cls: type) -> None:
        """Weave the public plain functions in ``cls``'s own namespace."""
        for name, member in list(vars(cls).items()):
            if name.startswith("_") or not isfunction(member):
                continue
            audited = AuditedCallable(member, weaver=self)
            setattr(cls, name, audited)
            audited.__set_name__(cls, name)

    def watch_subclasses(self, cls: type) -> None:
        """Weave every future subclass of ``cls`` as it is created.

        Overrides and new methods in an undecorated subclass then reach the
        dispatcher, which resolves their handlers through the MRO (inherited
        method-level config, then inherited type-level config). Installs an
        ``__init_subclass__`` hook once per hierarchy (subclasses inherit it);
        an ``__init_subclass__`` defined by ``cls`` itself still runs first.
        """
        if getattr(cls, SUBCLASS_HOOK_ATTR, None) is not None:
            return
        own_hook = vars(cls).get("__init_subclass__")
        weaver = self

        def __init_subclass__(subclass: type, **kwargs: Any) -> None:
            if own_hook is not None:
                own_hook.__get__(None, subclass)(**kwargs)
            else:
                super(cls, subclass).__init_subclass__(**kwargs)
            weaver.weave_members(subclass)

        setattr(cls, SUBCLASS_HOOK_ATTR, self)
        cls.__init_subclass__ = classmethod(__init_subclass__)

    def bind(self, audited: AuditedCallable, instance: Any) -> Callable[..., Any]:
        """Return ``audited`` bound to ``instance``."""
        func = audited.__wrapped__

        if audited.is_coroutine:

            @wraps(func)
            async def bound_async(*args: Any, **kwargs: Any) -> Any:
                return await self._invoke_async(audited, instance, args, kwargs)

            return bound_async

        @wraps(func)
        def bound(*args: Any, **kwargs: Any) -> Any:
            return self._invoke(audited, instance, args, kwargs)

        return bound

    def call(
        self,
        audited: AuditedCallable,
        instance: Any,
        args: tuple[Any, ...],
        kwargs: Mapping[str, Any],
    ) -> Any:
        """Run ``audited`` with the phase triggers (coroutine for async)."""
        if audited.is_coroutine:
            return self._invoke_async(audited, instance, args, kwargs)
        return self._invoke(audited, instance, args, kwargs)

    def _invoke(
        self,
        audited: AuditedCallable,
        instance: Any,
        args: tuple[Any, ...],
        kwargs: Mapping[str, Any],
    ) -> Any:
        context = self._new_context(audited, instance, args, kwargs)
        self._dispatch(Phase.BEFORE, context)
        try:
            result = audited.__wrapped__(*self._call_args(instance, args), **kwargs)
        except Exception as e:
            self._dispatch(Phase.AFTER_THROWING, context.raised(e))
            raise
        self._dispatch(Phase.AFTER_RETURNING, context.returned(result))
        return result

    async def _invoke_async(
        self,
        audited: AuditedCallable,
        instance: Any,
        args: tuple[Any, ...],
        kwargs: Mapping[str, Any],
    ) -> Any:
        context = self._new_context(audited, instance, args, kwargs)
        self._dispatch(Phase.BEFORE, context)
        try:
            result = await audited.__wrapped__(
                *self._call_args(instance, args), **kwargs
            )
        except Exception as e:
            self._dispatch(Phase.AFTER_THROWING, context.raised(e))
            raise
        self._dispatch(Phase.AFTER_RETURNING, context.returned(result))
        return result

    @staticmethod
    def _call_args(instance: Any, args: tuple[Any, ...]) -> tuple[Any, ...]:
        return args if instance is None else (instance, *args)

    @staticmethod
    def _new_context(
        audited: AuditedCallable,
        instance: Any,
        args: tuple[Any, ...],
        kwargs: Mapping[str, Any],
    ) -> InvocationContext:
        site = InvocationSite(
            method_name=audited.attr_name,
            target_type=type(instance) if instance is not None else None,
            function=audited,
        )
        return InvocationContext(site=site, instance=instance, args=args, kwargs=kwargs)

    def _dispatch(self, phase: Phase, context: InvocationContext) -> None:
        try:
            self._dispatcher_provider().dispatch(phase, context)
        except Exception as e:
            # Engine faults (wiring, logging) must not reach the business call
            with suppress(Exception):
                self._logger_provider().error(
                    "audit_dispatch_failed",
                    error=e,
                    phase=phase.value,
                    target=context.target,
                    invocation_id=str(context.invocation_id),
                )


_default_weaver = AuditWeaver()


def auditable(*handlers: str) -> Callable[[T], T]:
    """Attach audit handler names to a function, method or class.

    Uses the container's dispatcher (``AUDIT_HANDLERS`` wiring). Build an
    AuditWeaver with an explicit ``dispatcher_provider`` to use another
    registry.

    Example:
        >>> @auditable("dbAudit", "failingAudit", "inMemoryAudit")
        ... def boom() -> None:
        ...     raise ValueError("expected")
    """
    return _default_weaver.auditable(*handlers)
