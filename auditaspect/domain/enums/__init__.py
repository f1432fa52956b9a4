"""Domain enums package."""

from auditaspect.domain.enums.phase import Phase

__all__ = ["Phase"]
