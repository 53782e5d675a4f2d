"""Application environment types.

Defines the different runtime environments for the engine.
Used by Settings to determine environment-specific behavior
(log rendering, email backend defaults).

Environments:
- DEVELOPMENT: Local development, console log rendering
- TESTING: Automated test execution with isolated database
- CI: Continuous integration environment
- PRODUCTION: Production deployment, JSON log rendering
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
