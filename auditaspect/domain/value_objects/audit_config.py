"""AuditConfig value object.

Immutable list of handler names attached to a method or to a type.
"""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class AuditConfig:
    """Ordered, de-duplicated handler names for one attachment point.

    A method-level config with at least one name fully replaces the type-level
    config of its declaring type. Configs at the two levels never merge.

    Attributes:
        handlers: Handler names in declaration order, first occurrence kept.

    Raises:
        TypeError: If a handler name is not a string.
        ValueError: If a handler name is blank.

    Example:
        >>> AuditConfig(("dbAudit", "dbAudit", "memAudit")).handlers
        ('dbAudit', 'memAudit')
        >>> AuditConfig().has_handlers
        False
    """

    handlers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate names and collapse duplicates to their first occurrence.

        Raises:
            TypeError: If a name is not a string.
            ValueError: If a name is blank.
        """
        for name in self.handlers:
            if not isinstance(name, str):
                raise TypeError(
                    f"Audit handler names must be strings, got {type(name).__name__}"
                )
            if not name.strip():
                raise ValueError("Audit handler names must be non-empty")
        # Use object.__setattr__ because dataclass is frozen
        object.__setattr__(self, "handlers", tuple(dict.fromkeys(self.handlers)))

    @classmethod
    def of(cls, names: Iterable[str]) -> "AuditConfig":
        """Build a config from any iterable of names."""
        if isinstance(names, str):
            names = (names,)
        return cls(tuple(names))

    @property
    def has_handlers(self) -> bool:
        return bool(self.handlers)


AUDIT_CONFIG_ATTR = "__audit_config__"


def declared_config(obj: object) -> AuditConfig | None:
    """Return the AuditConfig attached directly to ``obj``, if any.

    For classes only the class's own namespace is consulted; inheritance is
    the resolver's job.
    """
    if isinstance(obj, type):
        config = vars(obj).get(AUDIT_CONFIG_ATTR)
    else:
        config = getattr(obj, AUDIT_CONFIG_ATTR, None)
    return config if isinstance(config, AuditConfig) else None


def attach_config(obj: object, config: AuditConfig) -> None:
    setattr(obj, AUDIT_CONFIG_ATTR, config)
