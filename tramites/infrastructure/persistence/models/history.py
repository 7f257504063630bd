"""DocumentHistory ORM model: the append-only audit ledger."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    Connection,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    event,
)
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from tramites.infrastructure.persistence.database import Base
from tramites.infrastructure.persistence.models.mixins import CuidMixin


class DocumentHistory(CuidMixin, Base):
    """Immutable ledger entry. Table: document_history.

    from_office_id is null for the first entry; user_id is null for
    anonymous public submissions. sequence numbers a document's entries
    from 1 in insertion order. A migration adds database triggers that
    block UPDATE and DELETE as well.
    """

    __tablename__ = "document_history"

    document_id: Mapped[str] = mapped_column(
        String, ForeignKey("document.id", ondelete="RESTRICT"), nullable=False
    )
    status_at_moment: Mapped[str] = mapped_column(String(16), nullable=False)
    observation: Mapped[str | None] = mapped_column(Text, nullable=True)
    from_office_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("office.id", ondelete="RESTRICT"), nullable=True
    )
    to_office_id: Mapped[str] = mapped_column(
        String, ForeignKey("office.id", ondelete="RESTRICT"), nullable=False
    )
    user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=True
    )
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        Index("ix_document_history_document_time", "document_id", "timestamp"),
        UniqueConstraint("document_id", "sequence", name="uq_document_history_sequence"),
    )


@event.listens_for(DocumentHistory, "before_update")
def _prevent_history_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: DocumentHistory
) -> None:
    """Ledger entries are immutable; append a new entry instead."""
    raise ValueError("Document history entries are immutable and cannot be updated.")


@event.listens_for(DocumentHistory, "before_delete")
def _prevent_history_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: DocumentHistory
) -> None:
    raise ValueError("Document history entries are immutable and cannot be deleted.")
