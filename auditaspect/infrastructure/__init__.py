"""Infrastructure adapters: logging, registry, dispatch, reference handlers."""
