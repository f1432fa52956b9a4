"""Audit engine dependency factories.

Application-scoped singletons wired once at startup:
- Handler registry (from AUDIT_HANDLERS, frozen)
- Configuration resolver
- Phase dispatcher

Call ``reset_engine()`` after changing settings to rebuild everything on next
access (tests, reconfiguration at startup).
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from auditaspect.core.config import get_settings
from auditaspect.core.container.infrastructure import get_logger

if TYPE_CHECKING:
    from auditaspect.domain.protocols.handler_registry_protocol import (
        HandlerRegistryProtocol,
    )
    from auditaspect.infrastructure.dispatch import (
        ConfigurationResolver,
        PhaseDispatcher,
    )


@lru_cache()
def get_handler_registry() -> "HandlerRegistryProtocol":
    """Get handler registry singleton (app-scoped).

    Built from ``AUDIT_HANDLERS``. With ``AUDIT_STRICT_WIRING=true`` any
    unresolvable entry aborts startup; otherwise it is logged and skipped.

    Returns:
        Frozen registry implementing HandlerRegistryProtocol.

    Raises:
        RuntimeError: In strict mode, when a handler cannot be wired.
    """
    from auditaspect.infrastructure.registry import build_handler_registry

    settings = get_settings()
    return build_handler_registry(
        settings.handlers,
        logger=get_logger(),
        strict=settings.strict_wiring,
    )


@lru_cache()
def get_configuration_resolver() -> "ConfigurationResolver":
    """Get configuration resolver singleton (app-scoped)."""
    from auditaspect.infrastructure.dispatch import ConfigurationResolver

    return ConfigurationResolver()


@lru_cache()
def get_dispatcher() -> "PhaseDispatcher":
    """Get phase dispatcher singleton (app-scoped).

    Usage:
        dispatcher = get_dispatcher()
        report = dispatcher.dispatch(Phase.BEFORE, context)
    """
    from auditaspect.infrastructure.dispatch import PhaseDispatcher

    return PhaseDispatcher(
        registry=get_handler_registry(),
        resolver=get_configuration_resolver(),
        logger=get_logger(),
        timing_enabled=get_settings().timing_enabled,
    )


def reset_engine() -> None:
    """Drop every cached engine singleton (settings and logger included)."""
    get_dispatcher.cache_clear()
    get_configuration_resolver.cache_clear()
    get_handler_registry.cache_clear()
    get_logger.cache_clear()
    get_settings.cache_clear()
