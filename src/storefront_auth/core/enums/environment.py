"""Application environment types.

Defines the runtime environments the service distinguishes between.
Used by Settings to select cookie security, log rendering and error detail.

Environments:
- DEVELOPMENT: Local development, verbose errors with stack traces
- TESTING: Automated test execution with an isolated database
- CI: Continuous integration
- PRODUCTION: Deployed service (secure cookies, redacted errors)
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
