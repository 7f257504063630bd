"""Block UPDATE and DELETE on document_history at the database level.

Revision ID: 8b4e6d1f2a93
Revises: 3f1a9c2d7e10
Create Date: 2026-10-19 09:40:02.551876

The ledger is append-only; a correction is a new entry. The ORM guards in
models/history.py cover application code, these triggers cover everything
else. Attachments may only be added, so they get an UPDATE guard as well.
"""

from typing import Sequence, Union

from alembic import op

revision: str = "8b4e6d1f2a93"
down_revision: Union[str, Sequence[str], None] = "3f1a9c2d7e10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _guard_function(name: str, message: str) -> str:
    return f"""
    CREATE OR REPLACE FUNCTION {name}()
    RETURNS TRIGGER
    LANGUAGE plpgsql
    AS $$
    BEGIN
        RAISE EXCEPTION '{message}'
            USING ERRCODE = 'integrity_constraint_violation';
    END;
    $$
    """


def upgrade() -> None:
    if op.get_bind().dialect.name != "postgresql":
        return
    op.execute(
        _guard_function(
            "prevent_document_history_mutation",
            "document_history rows are append-only; add a new entry instead",
        )
    )
    op.execute(
        "CREATE TRIGGER prevent_document_history_update_delete "
        "BEFORE UPDATE OR DELETE ON document_history "
        "FOR EACH ROW EXECUTE PROCEDURE prevent_document_history_mutation()"
    )
    op.execute(
        _guard_function(
            "prevent_document_attachment_update",
            "document_attachment rows cannot be modified; upload a new file instead",
        )
    )
    op.execute(
        "CREATE TRIGGER prevent_document_attachment_update "
        "BEFORE UPDATE ON document_attachment "
        "FOR EACH ROW EXECUTE PROCEDURE prevent_document_attachment_update()"
    )


def downgrade() -> None:
    if op.get_bind().dialect.name != "postgresql":
        return
    op.execute(
        "DROP TRIGGER IF EXISTS prevent_document_attachment_update ON document_attachment"
    )
    op.execute("DROP FUNCTION IF EXISTS prevent_document_attachment_update()")
    op.execute(
        "DROP TRIGGER IF EXISTS prevent_document_history_update_delete ON document_history"
    )
    op.execute("DROP FUNCTION IF EXISTS prevent_document_history_mutation()")
