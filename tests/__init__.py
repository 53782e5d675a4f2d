"""Test suite for the entitlement engine.

Test structure follows the test pyramid:
- unit/: Unit tests - Domain logic and handlers with mocked ports
- integration/: Integration tests - Services and repositories against SQLite
- smoke/: Smoke tests - One user's journey through the container

Integration and smoke tests use a throwaway SQLite file per test, so no
external services are required.
"""
