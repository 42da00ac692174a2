"""Application environment types.

Defines the runtime environments the lifecycle service can run in.
Used by Settings to pick environment-specific behaviour (log rendering,
reaper scheduling in tests).

Environments:
- DEVELOPMENT: Local development, human-readable logs
- TESTING: Automated test execution against a throwaway database
- CI: Continuous integration runs
- PRODUCTION: Production deployment
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
