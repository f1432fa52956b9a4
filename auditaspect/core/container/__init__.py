"""Container module - Centralized dependency injection.

Re-exports all factory functions so callers import from one place:

    from auditaspect.core.container import get_dispatcher, get_logger

The container is organized into modules:
- infrastructure: Ambient services (logging)
- engine: Handler registry, resolver, dispatcher
"""

from auditaspect.core.container.engine import (
    get_configuration_resolver,
    get_dispatcher,
    get_handler_registry,
    reset_engine,
)
from auditaspect.core.container.infrastructure import get_logger

__all__ = [
    "get_logger",
    "get_handler_registry",
    "get_configuration_resolver",
    "get_dispatcher",
    "reset_engine",
]
