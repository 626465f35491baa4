"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `notes` table backing the key-value note store.
How:   Composite primary key (kind, name); one nullable column per note field.

Rollback: downgrade() drops the table entirely (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the notes table and the listing index. See addrnotes/models/note.py."""
    op.create_table(
        "notes",

        # Storage key
        sa.Column(
            "kind",
            sa.String(64),
            nullable=False,
            comment="Entity kind of the storage key (always 'Note' today)",
        ),
        sa.Column(
            "name",
            sa.String(64),
            nullable=False,
            comment="Key name: the Base58 note address",
        ),

        # Note fields; NULL means the field was never set
        sa.Column("cost", sa.BigInteger(), nullable=True),
        sa.Column("cost_unit", sa.Text(), nullable=True),
        sa.Column("value", sa.BigInteger(), nullable=True),
        sa.Column("value_unit", sa.Text(), nullable=True),
        sa.Column("status", sa.Text(), nullable=True),

        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was first saved (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was last saved (UTC)",
        ),

        sa.PrimaryKeyConstraint("kind", "name"),
    )

    # Serves GET /api/notes: WHERE kind = 'Note' ORDER BY value
    op.create_index("idx_notes_kind_value", "notes", ["kind", "value"])


def downgrade() -> None:
    """Drop the notes table entirely. WARNING: destructive."""
    op.drop_index("idx_notes_kind_value", table_name="notes")
    op.drop_table("notes")
