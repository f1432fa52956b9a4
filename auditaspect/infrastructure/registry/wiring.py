"""Registry wiring from dotted import paths.

The composition root turns ``AuditSettings.handlers`` (name -> import path)
into a frozen InMemoryHandlerRegistry at startup. Each path names either a
handler instance, a handler class (instantiated with no arguments) or a
zero-argument factory returning a handler.

Path formats:
    - ``"myapp.audit:DbAuditHandler"``
    - ``"myapp.audit.DbAuditHandler"``

Modes:
    - strict: any unresolvable entry raises RuntimeError (fail fast).
    - graceful: the entry is logged at warning level and left out; the name
      then surfaces as an unknown handler at dispatch time.
"""

from collections.abc import Mapping
from importlib import import_module
from typing import Any

from auditaspect.core.errors import describe_error
from auditaspect.domain.protocols.audit_handler_protocol import AuditHandler
from auditaspect.domain.protocols.logger_protocol import LoggerProtocol
from auditaspect.infrastructure.registry.in_memory_handler_registry import (
    InMemoryHandlerRegistry,
)


def import_object(path: str) -> Any:
    """Import the object named by a dotted path.

    Args:
        path: ``"module:attr"`` or ``"module.attr"``; nested attributes are
            allowed after the colon (``"module:Outer.inner"``).

    Returns:
        The imported object.

    Raises:
        ImportError: If the module cannot be imported or the attribute does
            not exist.
    """
    if ":" in path:
        module_path, _, attr_path = path.partition(":")
    else:
        module_path, _, attr_path = path.rpartition(".")
    if not module_path or not attr_path:
        raise ImportError(f"'{path}' is not a valid import path")

    module = import_module(module_path)
    target: Any = module
    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ImportError(f"'{path}' has no attribute '{part}'") from e
    return target


def _materialize(obj: Any) -> Any:
    if isinstance(obj, type):
        return obj()
    if callable(obj) and not isinstance(obj, AuditHandler):
        return obj()
    return obj


def build_handler_registry(
    import_paths: Mapping[str, str],
    *,
    logger: LoggerProtocol,
    strict: bool = False,
) -> InMemoryHandlerRegistry:
    """Resolve import paths into handlers and freeze them in a registry.

    Args:
        import_paths: Handler name to dotted import path.
        logger: Logger for graceful-mode wiring warnings.
        strict: Raise instead of skipping unresolvable entries.

    Returns:
        InMemoryHandlerRegistry: Frozen registry of every resolvable handler.

    Raises:
        RuntimeError: In strict mode, when an entry cannot be imported,
            instantiated, or does not implement AuditHandler.
    """
    handlers: dict[str, AuditHandler] = {}

    for name, path in import_paths.items():
        try:
            handler = _materialize(import_object(path))
            if not isinstance(handler, AuditHandler):
                raise TypeError(
                    f"{type(handler).__name__} does not implement "
                    "before(), after_returning() and after_throwing()"
                )
        except Exception as e:
            if strict:
                raise RuntimeError(
                    f"AUDIT_STRICT_WIRING: cannot wire audit handler '{name}' "
                    f"from '{path}': {describe_error(e)}"
                ) from e
            logger.warning(
                "audit_handler_wiring_failed",
                handler=name,
                import_path=path,
                error_type=type(e).__name__,
                error_message=describe_error(e),
            )
            continue
        handlers[name] = handler

    logger.debug(
        "audit_registry_built",
        handlers_count=len(handlers),
        handlers=list(handlers),
    )
    return InMemoryHandlerRegistry(handlers)
