"""DTOs for offices and users (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from tramites.domain.enums import OfficeType, UserRole


@dataclass(frozen=True)
class OfficeCreate:
    name: str
    acronym: str
    office_type: OfficeType
    parent_office_id: str | None = None


@dataclass(frozen=True)
class OfficeResult:
    id: str
    name: str
    acronym: str
    office_type: OfficeType
    parent_office_id: str | None
    created_at: datetime


@dataclass
class OfficeTreeNode:
    """Office with its children, for the organisation chart view."""

    office: OfficeResult
    children: list[OfficeTreeNode] = field(default_factory=list)


@dataclass(frozen=True)
class UserResult:
    """User read-model. Never carries the password hash."""

    id: str
    email: str
    dni: str
    name: str
    last_name: str
    username: str
    role: UserRole
    office_id: str | None
    is_active: bool

    @property
    def display_name(self) -> str:
        return f"{self.name} {self.last_name}".strip()


@dataclass(frozen=True)
class UserCredentials:
    """User plus stored hash; only the sign-in path reads this."""

    user: UserResult
    password_hash: str
