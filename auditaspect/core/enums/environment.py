"""Runtime environment types.

Used by AuditSettings and the container to pick environment-specific
behaviour (log rendering in particular).

Environments:
- DEVELOPMENT: Local development, human-readable console logs
- TESTING: Automated test execution, JSON logs
- CI: Continuous integration, JSON logs
- PRODUCTION: Deployed service, JSON logs
"""

from enum import Enum


class Environment(str, Enum):
    """Runtime environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"

    @property
    def renders_json(self) -> bool:
        """Whether logs should be machine-readable in this environment."""
        return self is not Environment.DEVELOPMENT
