"""Document ORM model. Current status and office are a projection of the ledger head."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tramites.domain.enums import ApplicantType, DocumentStatus, DocumentType
from tramites.infrastructure.persistence.database import Base
from tramites.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


def _in_values(column: str, values: list[str]) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


class Document(CuidMixin, TimestampMixin, Base):
    """Document entity. Table: document.

    Applicant fields are a snapshot taken at submission. version is bumped
    on every transition and used for optimistic concurrency.
    """

    __tablename__ = "document"

    tracking_code: Mapped[str] = mapped_column(String(32), nullable=False)
    applicant_type: Mapped[str] = mapped_column(String(32), nullable=False)
    applicant_identifier: Mapped[str] = mapped_column(String(32), nullable=False)
    applicant_name: Mapped[str] = mapped_column(String, nullable=False)
    applicant_lastname: Mapped[str] = mapped_column(String, nullable=False)
    applicant_email: Mapped[str] = mapped_column(String, nullable=False)
    applicant_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    applicant_address: Mapped[str | None] = mapped_column(String, nullable=True)
    document_type: Mapped[str] = mapped_column(String(32), nullable=False)
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    page_count: Mapped[int] = mapped_column(Integer, nullable=False)
    current_status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    current_office_id: Mapped[str] = mapped_column(
        String, ForeignKey("office.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    owner_office_id: Mapped[str] = mapped_column(
        String, ForeignKey("office.id", ondelete="RESTRICT"), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __table_args__ = (
        Index("uq_document_tracking_code", "tracking_code", unique=True),
        Index("ix_document_office_status", "current_office_id", "current_status"),
        Index("ix_document_status_created", "current_status", "created_at"),
        CheckConstraint("page_count >= 1", name="ck_document_page_count"),
        CheckConstraint(
            _in_values("current_status", DocumentStatus.values()),
            name="ck_document_status",
        ),
        CheckConstraint(
            _in_values("applicant_type", ApplicantType.values()),
            name="ck_document_applicant_type",
        ),
        CheckConstraint(
            _in_values("document_type", DocumentType.values()),
            name="ck_document_type",
        ),
    )
