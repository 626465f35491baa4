"""
AddrNotes Backend — SQL Note Store
====================================

What:  NoteStore implementation on async SQLAlchemy.
Why:   Gives the service a transactional key-value backend that runs on
       PostgreSQL in production and SQLite in tests.
How:   Every call opens its own session from the long-lived session factory
       and commits before returning, so a save/delete ack means durable.
       Driver errors are logged with the traceback and wrapped in StorageError.
Who:   Created once per process in dependencies.py; injected into NoteService.

Query plans:
    get / delete:  primary key lookup on (kind, name)
    save:          INSERT .. ON CONFLICT (kind, name) DO UPDATE, last write wins
    query:         idx_notes_kind_value, ORDER BY value NULLS FIRST, name
"""

import logging
from typing import Callable, List, Optional, Tuple

from sqlalchemy import delete, select, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from addrnotes.exceptions import StorageError
from addrnotes.models.note import FIELD_COLUMNS, NoteRow, utcnow
from addrnotes.services.keys import StorageKey
from addrnotes.services.records import NoteRecord
from addrnotes.services.store_base import NoteStore

logger = logging.getLogger(__name__)

# Dialect-specific INSERT constructs that support ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SqlNoteStore(NoteStore):
    """
    Note store backed by the `notes` table.

    Args:
        session_factory: zero-argument callable returning an AsyncSession
                         context manager (an async_sessionmaker in practice)
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self._session_factory = session_factory

    async def get(self, key: StorageKey) -> Optional[NoteRecord]:
        try:
            async with self._session_factory() as session:
                row = await session.get(NoteRow, (key.kind, key.name))
                return row.to_record() if row is not None else None
        except (SQLAlchemyError, OSError) as e:
            raise self._storage_error("get", key, e) from e

    async def save(self, key: StorageKey, record: NoteRecord) -> None:
        """Upsert on (kind, name); fields outside FIELD_COLUMNS are not stored."""
        values = {column: record.get(field) for field, column in FIELD_COLUMNS.items()}

        try:
            async with self._session_factory() as session:
                insert = _UPSERT_INSERTS[session.bind.dialect.name]
                statement = insert(NoteRow).values(kind=key.kind, name=key.name, **values)
                # Whole-record replace: fields missing from `record` become NULL
                statement = statement.on_conflict_do_update(
                    index_elements=[NoteRow.kind, NoteRow.name],
                    set_={**values, "updated_at": utcnow()},
                )
                await session.execute(statement)
                await session.commit()
        except (SQLAlchemyError, OSError, OverflowError) as e:
            raise self._storage_error("save", key, e) from e

    async def delete(self, key: StorageKey) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(
                    delete(NoteRow).where(
                        NoteRow.kind == key.kind,
                        NoteRow.name == key.name,
                    )
                )
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise self._storage_error("delete", key, e) from e

    async def query(self, kind: str, order_by: str) -> List[Tuple[StorageKey, NoteRecord]]:
        if order_by not in FIELD_COLUMNS:
            raise ValueError(f"Cannot order notes by unknown field '{order_by}'")
        column = getattr(NoteRow, FIELD_COLUMNS[order_by])

        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(NoteRow)
                    .where(NoteRow.kind == kind)
                    .order_by(column.asc().nulls_first(), NoteRow.name.asc())
                )
                rows = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Storage query on kind %s failed: %s", kind, e, exc_info=True)
            raise StorageError(
                message="Could not list notes. Please try again.",
                context={"operation": "query", "kind": kind, "error_type": type(e).__name__},
            ) from e

        return [(StorageKey(row.kind, row.name), row.to_record()) for row in rows]

    async def health_check(self) -> bool:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Health check: database unreachable: %s", e)
            return False

    @staticmethod
    def _storage_error(operation: str, key: StorageKey, error: Exception) -> StorageError:
        logger.error(
            "Storage %s of %s/%s failed: %s",
            operation,
            key.kind,
            key.name,
            error,
            exc_info=True,
        )
        return StorageError(
            context={
                "operation": operation,
                "key": f"{key.kind}/{key.name}",
                "error_type": type(error).__name__,
            },
        )
