"""Configuration resolver.

Turns an InvocationSite into the ordered tuple of handler names to notify.

Precedence rules:
    1. The most specific definition of the method on the runtime type (the
       first class in the MRO whose namespace defines the name). If that
       definition carries no configuration, the lookup continues to the
       definitions it overrides; the first configuration found wins.
    2. If the method-level configuration is missing or empty, the type-level
       configuration of the runtime type, inherited through the MRO.
    3. Otherwise an empty tuple: nothing to dispatch, not an error.

Method-level and type-level names are never merged.
"""

from auditaspect.domain.value_objects import AuditConfig, InvocationSite, declared_config


class ConfigurationResolver:
    """Pure lookup of handler names for a call site.

    Stateless and side-effect free; one instance is shared by all threads.

    Example:
        >>> @auditable("dbAudit", "inMemoryAudit")
        ... class DemoService:
        ...     @auditable("inMemoryAudit")
        ...     def only_memory_sink(self): ...
        >>> resolver = ConfigurationResolver()
        >>> resolver.resolve(InvocationSite(method_name="only_memory_sink", target_type=DemoService))
        ('inMemoryAudit',)
    """

    def resolve(self, site: InvocationSite) -> tuple[str, ...]:
        """Return handler names for ``site`` in dispatch order."""
        method_config = self.method_config(site)
        if method_config is not None and method_config.has_handlers:
            return method_config.handlers

        type_config = self.type_config(site.target_type)
        if type_config is not None and type_config.has_handlers:
            return type_config.handlers

        return ()

    def method_config(self, site: InvocationSite) -> AuditConfig | None:
        """Method-level configuration of the most specific definition."""
        if site.target_type is not None:
            for klass in site.target_type.__mro__:
                member = vars(klass).get(site.method_name)
                if member is None:
                    continue
                config = declared_config(member)
                if config is not None:
                    return config
        # Module-level functions, or callables not found on the type
        return declared_config(site.function) if site.function is not None else None

    def type_config(self, target_type: type | None) -> AuditConfig | None:
        """Type-level configuration, inherited through the MRO."""
        if target_type is None:
            return None
        for klass in target_type.__mro__:
            config = declared_config(klass)
            if config is not None:
                return config
        return None
