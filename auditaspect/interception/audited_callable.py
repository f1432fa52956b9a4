"""Woven callables.

AuditedCallable replaces a function or method body with one that triggers
the three audit phases around the original. It is a descriptor, so when it
lives in a class namespace it binds like a normal method and learns its
owner and attribute name through ``__set_name__``.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import update_wrapper
from inspect import iscoroutinefunction, markcoroutinefunction
from typing import TYPE_CHECKING, Any

from auditaspect.domain.value_objects import AuditConfig, attach_config

if TYPE_CHECKING:
    from auditaspect.interception.weaver import AuditWeaver


class AuditedCallable:
    """Descriptor wrapping a function with audit phase triggers.

    Attributes:
        __wrapped__: The original function.
        owner: Class whose namespace holds this callable, ``None`` for
            module-level functions.
        attr_name: Name of the attribute in ``owner`` (falls back to the
            function's ``__name__``).
    """

    def __init__(
        self,
        func: Callable[..., Any],
        *,
        weaver: AuditWeaver,
        config: AuditConfig | None = None,
    ) -> None:
        update_wrapper(self, func)
        self._weaver = weaver
        self.owner: type | None = None
        self.attr_name: str = func.__name__
        if config is not None:
            attach_config(self, config)
        if iscoroutinefunction(func):
            markcoroutinefunction(self)

    @property
    def is_coroutine(self) -> bool:
        return iscoroutinefunction(self.__wrapped__)

    def __set_name__(self, owner: type, name: str) -> None:
        self.owner = owner
        self.attr_name = name
        # Overrides in subclasses of owner must be woven too
        self._weaver.watch_subclasses(owner)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return self._weaver.bind(self, instance)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        # Unbound access through the class: Owner.method(instance, ...)
        if self.owner is not None and args and isinstance(args[0], self.owner):
            return self._weaver.call(self, args[0], args[1:], kwargs)
        return self._weaver.call(self, None, args, kwargs)

    def __repr__(self) -> str:
        return f"<audited {self.__wrapped__!r}>"
