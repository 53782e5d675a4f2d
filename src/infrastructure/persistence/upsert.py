"""Dialect-aware INSERT ... ON CONFLICT statements.

Atomic upserts are the store primitive the engine relies on (usage
increments, subscription assignment, rate-limit record creation). Both
supported backends spell them the same way through their dialect-specific
``insert()`` construct.
"""

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


def upsert_insert(session: AsyncSession, model: type[Any]) -> Any:
    """Build an ``INSERT`` supporting ``on_conflict_do_*`` for the session's dialect.

    Args:
        session: Session whose bind decides the dialect.
        model: Mapped model class to insert into.

    Returns:
        A PostgreSQL or SQLite ``Insert`` construct.

    Raises:
        NotImplementedError: For dialects without ON CONFLICT support.
    """
    dialect = session.bind.dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    raise NotImplementedError(f"Upsert not supported for dialect: {dialect}")
