"""
Configuration management using Pydantic Settings.

Type-safe, validated configuration for the audit engine, loaded from
environment variables prefixed with ``AUDIT_``.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Cached singleton via get_settings()

Usage:
    from auditaspect.core.config import get_settings

    settings = get_settings()
    if settings.timing_enabled:
        ...

Environment:
    AUDIT_ENVIRONMENT=production
    AUDIT_LOG_LEVEL=DEBUG
    AUDIT_TIMING_ENABLED=false
    AUDIT_STRICT_WIRING=true
    AUDIT_HANDLERS='{"dbAudit": "myapp.audit:DbAuditHandler"}'
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from auditaspect.core.enums import Environment


class AuditSettings(BaseSettings):
    """
    Audit engine settings (flat structure).

    Configuration precedence:
        1. Environment variables (``AUDIT_*``)
        2. Default values

    Returns:
        AuditSettings: Engine configuration loaded from environment.
    """

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Runtime environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    timing_enabled: bool = Field(
        default=True,
        description="Measure phase and per-handler durations for diagnostics",
    )
    strict_wiring: bool = Field(
        default=False,
        description="Fail at startup when a configured handler cannot be imported",
    )
    handlers: dict[str, str] = Field(
        default_factory=dict,
        description="Handler name to dotted import path (JSON object)",
    )

    model_config = SettingsConfigDict(
        env_prefix="AUDIT_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate the log level is a standard level name.

        Args:
            v: Level name in any case.

        Returns:
            str: Upper-cased level name.

        Raises:
            ValueError: If the name is not a standard logging level.
        """
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return level

    @field_validator("handlers")
    @classmethod
    def validate_handlers(cls, v: dict[str, str]) -> dict[str, str]:
        """
        Validate handler names and import paths are non-blank.

        Raises:
            ValueError: If a name or path is empty.
        """
        for name, path in v.items():
            if not name.strip():
                raise ValueError("handler names must be non-empty")
            if not path.strip():
                raise ValueError(f"handler '{name}' has an empty import path")
        return v

    @property
    def log_level_number(self) -> int:
        """Numeric logging level for structlog filtering."""
        return logging.getLevelNamesMapping()[self.log_level]


@lru_cache
def get_settings() -> AuditSettings:
    """
    Get cached settings instance.

    Uses lru_cache so settings are loaded once per process. Call
    ``get_settings.cache_clear()`` to reload (tests).

    Returns:
        AuditSettings: Cached settings instance.
    """
    return AuditSettings()
