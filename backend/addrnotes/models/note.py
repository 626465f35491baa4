"""
AddrNotes Backend — Note SQLAlchemy Model
===========================================

What:  ORM model representing the `notes` table.
Why:   Gives the key-value note store a typed row per (kind, name) key.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by SqlNoteStore only. Services work with plain record dicts.

Table Design Rationale:
    - (kind, name) composite primary key: the storage key. `name` is the note
      address; it is never duplicated into a value column.
    - One nullable column per note field. NULL means "field absent"; the
      validator never lets an explicit null through, so NULL is unambiguous.
    - BIGINT for cost/value: integers arrive from JSON and may exceed 32 bits.
    - created_at / updated_at: maintained by the store, not exposed by the API.

    Index on (kind, value): serves the listing query, which orders by value.
"""

from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy import TIMESTAMP, BigInteger, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from addrnotes.database import Base


# Record field name (as exposed by the API) → column attribute on NoteRow
FIELD_COLUMNS: Dict[str, str] = {
    "cost": "cost",
    "costUnit": "cost_unit",
    "value": "value",
    "valueUnit": "value_unit",
    "status": "status",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NoteRow(Base):
    """
    One stored note.

    Lifecycle:
        1. Inserted on the first save for a key
        2. Overwritten as a whole on every later save (the caller merges first)
        3. Deleted outright; there is no soft delete
    """

    __tablename__ = "notes"

    # ── Storage Key ───────────────────────────────────────────────────────
    kind: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Entity kind of the storage key (always 'Note' today)",
    )
    name: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Key name: the Base58 note address",
    )

    # ── Note Fields ───────────────────────────────────────────────────────
    cost: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    cost_unit: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    value: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    value_unit: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was first saved (UTC)",
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was last saved (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_kind_value", "kind", "value"),
    )

    def to_record(self) -> Dict[str, object]:
        """Only the fields that hold a value; absent fields are left out."""
        record = {}
        for field, column in FIELD_COLUMNS.items():
            current = getattr(self, column)
            if current is not None:
                record[field] = current
        return record

    def __repr__(self) -> str:
        return f"<NoteRow(kind='{self.kind}', name='{self.name}', value={self.value})>"
