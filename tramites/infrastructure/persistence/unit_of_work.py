"""SQLAlchemy unit of work: one session, one transaction per run()."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tramites.application.interfaces.repositories import Repositories
from tramites.domain.exceptions import (
    PersistenceException,
    TrackingCodeCollisionException,
)
from tramites.infrastructure.persistence.repositories import (
    AttachmentRepository,
    DashboardRepository,
    DocumentHistoryRepository,
    DocumentRepository,
    OfficeRepository,
    UserRepository,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


def build_repositories(session: AsyncSession) -> Repositories:
    """Bind every repository to the same session."""
    return Repositories(
        offices=OfficeRepository(session),
        users=UserRepository(session),
        documents=DocumentRepository(session),
        attachments=AttachmentRepository(session),
        history=DocumentHistoryRepository(session),
        dashboard=DashboardRepository(session),
    )


def _is_tracking_code_violation(exc: IntegrityError) -> bool:
    text = str(exc.orig) if exc.orig is not None else str(exc)
    return "tracking_code" in text


class SqlAlchemyUnitOfWork:
    """Commits when work returns, rolls back when it raises.

    Domain exceptions pass through unchanged; driver errors are translated
    so callers never see SQLAlchemy types.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def run(self, work: Callable[[Repositories], Awaitable[T]]) -> T:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    return await work(build_repositories(session))
        except IntegrityError as exc:
            if _is_tracking_code_violation(exc):
                logger.warning("Tracking code collision, transaction rolled back")
                raise TrackingCodeCollisionException() from exc
            logger.error("Integrity violation, transaction rolled back: %s", exc.orig)
            raise PersistenceException() from exc
        except SQLAlchemyError as exc:
            logger.error("Database error, transaction rolled back: %s", exc)
            raise PersistenceException() from exc
