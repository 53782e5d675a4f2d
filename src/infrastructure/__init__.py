"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- persistence/: SQLAlchemy models, repositories, database wrapper, plan seeds
- security/: bcrypt hashing, JWT signing, opaque token generation
- audit/: Database-backed audit trail
- logging/: structlog adapter
- email/: Stub and Brevo email senders
- clock.py: System time source

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
