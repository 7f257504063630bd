"""Session factory and unit of work dependencies (composition root)."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tramites.application.interfaces.repositories import IUnitOfWork
from tramites.infrastructure.persistence.database import get_session_factory
from tramites.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork

SessionFactory = async_sessionmaker[AsyncSession]


def get_session_factory_dep() -> SessionFactory:
    """Process-wide session factory; tests override this dependency."""
    return get_session_factory()


def get_uow(
    factory: Annotated[SessionFactory, Depends(get_session_factory_dep)],
) -> IUnitOfWork:
    return SqlAlchemyUnitOfWork(factory)


async def get_transactional_session(
    factory: Annotated[SessionFactory, Depends(get_session_factory_dep)],
) -> AsyncIterator[AsyncSession]:
    """Session with an open transaction; commits on success, rolls back on error."""
    async with factory() as session:
        async with session.begin():
            yield session
