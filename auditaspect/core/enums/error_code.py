"""Machine-readable error codes for audit dispatch.

Error codes follow SUBJECT_REASON naming. They travel inside Failure results
and structured log records, never as raised exceptions.

Categories:
- Lookup errors (UNKNOWN_*)
- Execution errors (HANDLER_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes for handler outcomes."""

    # Lookup errors
    UNKNOWN_HANDLER = "unknown_handler"

    # Execution errors
    HANDLER_EXECUTION_FAILED = "handler_execution_failed"
    HANDLER_NOT_SYNCHRONOUS = "handler_not_synchronous"
