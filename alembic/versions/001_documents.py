"""Document store table: one row per (collection, id) with JSON data.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

QUERIED_FIELDS = ("userId", "splitId", "splitDayId", "sessionId", "exerciseId")


def upgrade() -> None:
    op.create_table(
        "documents",
        sa.Column("collection", sa.String(length=64), nullable=False),
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column(
            "data",
            sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql"),
            nullable=False,
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("collection", "id", name=op.f("pk_documents")),
    )
    op.create_index("ix_documents_collection", "documents", ["collection"], unique=False)
    # Equality lookups on the foreign keys the repositories query by
    if op.get_bind().dialect.name == "postgresql":
        for field in QUERIED_FIELDS:
            op.execute(
                sa.text(
                    f"CREATE INDEX IF NOT EXISTS ix_documents_{field.lower()} "
                    f"ON documents ((data ->> '{field}'))"
                )
            )


def downgrade() -> None:
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        for field in QUERIED_FIELDS:
            op.execute(sa.text(f"DROP INDEX IF EXISTS ix_documents_{field.lower()}"))
    op.drop_index("ix_documents_collection", table_name="documents")
    op.drop_table("documents")
