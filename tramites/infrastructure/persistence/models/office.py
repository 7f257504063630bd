"""Office ORM model. Self-referential tree of organisational units."""

from sqlalchemy import CheckConstraint, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from tramites.domain.enums import OfficeType
from tramites.infrastructure.persistence.database import Base
from tramites.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin

_OFFICE_TYPES = ", ".join(f"'{v}'" for v in OfficeType.values())


class Office(CuidMixin, TimestampMixin, Base):
    """Office entity. Table: office. Cycles are rejected by OfficeService at write time."""

    __tablename__ = "office"

    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    acronym: Mapped[str] = mapped_column(String(32), nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    parent_office_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("office.id", ondelete="RESTRICT"), nullable=True, index=True
    )

    __table_args__ = (
        CheckConstraint(f"type IN ({_OFFICE_TYPES})", name="ck_office_type"),
        CheckConstraint(
            "parent_office_id IS NULL OR parent_office_id <> id",
            name="ck_office_not_own_parent",
        ),
    )
