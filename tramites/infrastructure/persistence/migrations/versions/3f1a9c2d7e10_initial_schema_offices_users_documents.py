"""initial_schema_offices_users_documents

Revision ID: 3f1a9c2d7e10
Revises:
Create Date: 2026-10-19 09:12:44.118203

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1a9c2d7e10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_OFFICE_TYPES = (
    "'ALCALDIA', 'GERENCIA_MUNICIPAL', 'OFICINA_GENERAL', "
    "'GERENCIA_LINEA', 'UNIDAD', 'ORGANO_STAFF'"
)
_ROLES = "'SUPER_ADMIN', 'MESA_DE_PARTES', 'GERENTE', 'JEFE_OFICINA', 'STAFF_OFICINA'"
_STATUSES = (
    "'creado', 'recibido', 'derivado', 'en_revision', "
    "'atendido', 'archivado', 'rechazado'"
)
_APPLICANT_TYPES = "'PERSONA_NATURAL', 'PERSONA_JURIDICA'"
_DOCUMENT_TYPES = (
    "'SOLICITUD', 'OFICIO', 'CARTA', 'INFORME', 'MEMORANDO', 'RECLAMO', 'OTRO'"
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema - office tree, staff users, documents, attachments, history."""

    op.create_table(
        "office",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("acronym", sa.String(length=32), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("parent_office_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["parent_office_id"], ["office.id"], ondelete="RESTRICT"),
        sa.UniqueConstraint("name", name="uq_office_name"),
        sa.CheckConstraint(f"type IN ({_OFFICE_TYPES})", name="ck_office_type"),
        sa.CheckConstraint(
            "parent_office_id IS NULL OR parent_office_id <> id",
            name="ck_office_not_own_parent",
        ),
    )
    op.create_index("ix_office_parent_office_id", "office", ["parent_office_id"])

    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("dni", sa.String(length=16), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("office_id", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["office_id"], ["office.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("email", name="uq_app_user_email"),
        sa.UniqueConstraint("dni", name="uq_app_user_dni"),
        sa.UniqueConstraint("username", name="uq_app_user_username"),
        sa.CheckConstraint(f"role IN ({_ROLES})", name="ck_app_user_role"),
    )
    op.create_index("ix_app_user_office_id", "app_user", ["office_id"])

    op.create_table(
        "document",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tracking_code", sa.String(length=32), nullable=False),
        sa.Column("applicant_type", sa.String(length=32), nullable=False),
        sa.Column("applicant_identifier", sa.String(length=32), nullable=False),
        sa.Column("applicant_name", sa.String(), nullable=False),
        sa.Column("applicant_lastname", sa.String(), nullable=False),
        sa.Column("applicant_email", sa.String(), nullable=False),
        sa.Column("applicant_phone", sa.String(length=32), nullable=True),
        sa.Column("applicant_address", sa.String(), nullable=True),
        sa.Column("document_type", sa.String(length=32), nullable=False),
        sa.Column("subject", sa.Text(), nullable=False),
        sa.Column("page_count", sa.Integer(), nullable=False),
        sa.Column("current_status", sa.String(length=16), nullable=False),
        sa.Column("current_office_id", sa.String(), nullable=False),
        sa.Column("owner_office_id", sa.String(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["current_office_id"], ["office.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["owner_office_id"], ["office.id"], ondelete="RESTRICT"),
        sa.CheckConstraint("page_count >= 1", name="ck_document_page_count"),
        sa.CheckConstraint(f"current_status IN ({_STATUSES})", name="ck_document_status"),
        sa.CheckConstraint(
            f"applicant_type IN ({_APPLICANT_TYPES})", name="ck_document_applicant_type"
        ),
        sa.CheckConstraint(f"document_type IN ({_DOCUMENT_TYPES})", name="ck_document_type"),
    )
    op.create_index("uq_document_tracking_code", "document", ["tracking_code"], unique=True)
    op.create_index("ix_document_current_status", "document", ["current_status"])
    op.create_index("ix_document_current_office_id", "document", ["current_office_id"])
    op.create_index(
        "ix_document_office_status", "document", ["current_office_id", "current_status"]
    )
    op.create_index(
        "ix_document_status_created", "document", ["current_status", "created_at"]
    )

    op.create_table(
        "document_attachment",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("document_id", sa.String(), nullable=False),
        sa.Column("file_url", sa.String(), nullable=False),
        sa.Column("file_name", sa.String(), nullable=False),
        sa.Column("file_type", sa.String(length=128), nullable=False),
        sa.Column("file_key", sa.String(), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("checksum", sa.String(length=64), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["document_id"], ["document.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("file_key", name="uq_document_attachment_file_key"),
    )
    op.create_index(
        "ix_document_attachment_document_id", "document_attachment", ["document_id"]
    )

    op.create_table(
        "document_history",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("document_id", sa.String(), nullable=False),
        sa.Column("status_at_moment", sa.String(length=16), nullable=False),
        sa.Column("observation", sa.Text(), nullable=True),
        sa.Column("from_office_id", sa.String(), nullable=True),
        sa.Column("to_office_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["document_id"], ["document.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["from_office_id"], ["office.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["to_office_id"], ["office.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="RESTRICT"),
    )
    op.create_index(
        "ix_document_history_document_time",
        "document_history",
        ["document_id", "timestamp"],
    )


def downgrade() -> None:
    """Downgrade schema - drop all tables."""
    op.drop_index("ix_document_history_document_time", table_name="document_history")
    op.drop_table("document_history")
    op.drop_index("ix_document_attachment_document_id", table_name="document_attachment")
    op.drop_table("document_attachment")
    op.drop_index("ix_document_status_created", table_name="document")
    op.drop_index("ix_document_office_status", table_name="document")
    op.drop_index("ix_document_current_office_id", table_name="document")
    op.drop_index("ix_document_current_status", table_name="document")
    op.drop_index("uq_document_tracking_code", table_name="document")
    op.drop_table("document")
    op.drop_index("ix_app_user_office_id", table_name="app_user")
    op.drop_table("app_user")
    op.drop_index("ix_office_parent_office_id", table_name="office")
    op.drop_table("office")
