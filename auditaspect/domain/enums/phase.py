"""Interception phases.

A call can be observed at three moments. Each phase is dispatched
independently; the weaver triggers BEFORE for every call and exactly one of
AFTER_RETURNING or AFTER_THROWING once the call finishes.
"""

from enum import Enum


class Phase(str, Enum):
    """The three moments a call can be observed."""

    BEFORE = "BEFORE"
    AFTER_RETURNING = "AFTER_RETURNING"
    AFTER_THROWING = "AFTER_THROWING"
