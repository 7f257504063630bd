"""User repository. Returns application DTOs; the hash only via get_credentials."""

from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tramites.application.dtos.office import UserCredentials, UserResult
from tramites.domain.enums import UserRole
from tramites.infrastructure.persistence.models.user import User
from tramites.infrastructure.persistence.repositories.base import BaseRepository


def _user_to_result(u: User) -> UserResult:
    return UserResult(
        id=u.id,
        email=u.email,
        dni=u.dni,
        name=u.name,
        last_name=u.last_name,
        username=u.username,
        role=UserRole(u.role),
        office_id=u.office_id,
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    """Staff user lookups for the actor context and sign-in."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: str) -> UserResult | None:
        row = await self._get_orm(user_id)
        return _user_to_result(row) if row else None

    async def get_credentials(self, identifier: str) -> UserCredentials | None:
        """Look up by username, e-mail (case-insensitive) or DNI."""
        value = identifier.strip()
        if not value:
            return None
        result = await self.db.execute(
            select(User).where(
                or_(
                    User.username == value,
                    func.lower(User.email) == value.lower(),
                    User.dni == value,
                )
            )
        )
        row = result.scalars().first()
        if row is None:
            return None
        return UserCredentials(user=_user_to_result(row), password_hash=row.password_hash)

    async def create(self, user: User) -> UserResult:
        """Insert a prepared User row (bootstrap scripts)."""
        return _user_to_result(await self._insert(user))
