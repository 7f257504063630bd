"""User ORM model. Staff accounts; the table is app_user (user is reserved in Postgres)."""

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from tramites.domain.enums import UserRole
from tramites.infrastructure.persistence.database import Base
from tramites.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin

_ROLES = ", ".join(f"'{v}'" for v in UserRole.values())


class User(CuidMixin, TimestampMixin, Base):
    """Staff user. office_id is the office the user currently acts for."""

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    dni: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    username: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    office_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("office.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (CheckConstraint(f"role IN ({_ROLES})", name="ck_app_user_role"),)
