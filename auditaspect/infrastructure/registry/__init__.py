"""Handler registry adapter and startup wiring."""

from auditaspect.infrastructure.registry.in_memory_handler_registry import (
    InMemoryHandlerRegistry,
)
from auditaspect.infrastructure.registry.wiring import (
    build_handler_registry,
    import_object,
)

__all__ = ["InMemoryHandlerRegistry", "build_handler_registry", "import_object"]
