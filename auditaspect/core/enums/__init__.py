"""Core enums package.

Usage:
    from auditaspect.core.enums import ErrorCode, Environment
"""

from auditaspect.core.enums.environment import Environment
from auditaspect.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
