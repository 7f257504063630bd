"""DocumentAttachment ORM model. Append-only; files are added, never replaced."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    BigInteger,
    Connection,
    DateTime,
    ForeignKey,
    String,
    event,
)
from sqlalchemy.orm import Mapped, Mapper, mapped_column
from sqlalchemy.sql import func

from tramites.infrastructure.persistence.database import Base
from tramites.infrastructure.persistence.models.mixins import CuidMixin
from tramites.shared.utils.datetime import utc_now


class DocumentAttachment(CuidMixin, Base):
    """Attachment entity. Table: document_attachment. file_key locates the blob for deletion."""

    __tablename__ = "document_attachment"

    document_id: Mapped[str] = mapped_column(
        String, ForeignKey("document.id", ondelete="CASCADE"), nullable=False, index=True
    )
    file_url: Mapped[str] = mapped_column(String, nullable=False)
    file_name: Mapped[str] = mapped_column(String, nullable=False)
    file_type: Mapped[str] = mapped_column(String(128), nullable=False)
    file_key: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    checksum: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now(), nullable=False
    )


@event.listens_for(DocumentAttachment, "before_update")
def _prevent_attachment_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: DocumentAttachment
) -> None:
    """Attachments are append-only; add a new one instead."""
    raise ValueError("Document attachments are append-only and cannot be updated.")
