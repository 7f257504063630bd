"""Add document_history.sequence, the per-document insertion order.

Revision ID: c5d2e8a4b917
Revises: 8b4e6d1f2a93
Create Date: 2026-10-20 11:02:17.304512

Entries written at the same instant were ordered arbitrarily. Existing rows
are numbered by timestamp then id; new rows carry the document version
after the change. The append-only trigger is suspended for the backfill.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "c5d2e8a4b917"
down_revision: Union[str, Sequence[str], None] = "8b4e6d1f2a93"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_TRIGGER = "prevent_document_history_update_delete"

_BACKFILL = """
UPDATE document_history
SET sequence = (
    SELECT COUNT(*)
    FROM document_history AS earlier
    WHERE earlier.document_id = document_history.document_id
      AND (
        earlier.timestamp < document_history.timestamp
        OR (earlier.timestamp = document_history.timestamp AND earlier.id <= document_history.id)
      )
)
"""


def upgrade() -> None:
    postgres = op.get_bind().dialect.name == "postgresql"
    op.add_column("document_history", sa.Column("sequence", sa.Integer(), nullable=True))
    if postgres:
        op.execute(f"ALTER TABLE document_history DISABLE TRIGGER {_TRIGGER}")
    op.execute(_BACKFILL)
    if postgres:
        op.execute(f"ALTER TABLE document_history ENABLE TRIGGER {_TRIGGER}")
    with op.batch_alter_table("document_history") as batch:
        batch.alter_column("sequence", existing_type=sa.Integer(), nullable=False)
        batch.create_unique_constraint(
            "uq_document_history_sequence", ["document_id", "sequence"]
        )


def downgrade() -> None:
    with op.batch_alter_table("document_history") as batch:
        batch.drop_constraint("uq_document_history_sequence", type_="unique")
        batch.drop_column("sequence")
