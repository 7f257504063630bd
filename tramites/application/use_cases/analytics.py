"""Dashboard aggregation over documents: status counts, bottlenecks, office load."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from tramites.application.dtos.actor import ActorContext
from tramites.application.dtos.analytics import (
    Bottleneck,
    DashboardSnapshot,
    OfficeLoad,
    StatusCount,
)
from tramites.application.interfaces.repositories import IUnitOfWork, Repositories
from tramites.application.services.authorization_service import (
    Capability,
    ensure_capability,
)
from tramites.domain.enums import DocumentStatus
from tramites.domain.transitions import ACTIVE_STATUSES, TERMINAL_STATUSES
from tramites.shared.utils.datetime import utc_now, whole_days_between

DEFAULT_BOTTLENECK_LIMIT = 5

_STATUS_ORDER = {status: index for index, status in enumerate(DocumentStatus)}


class DashboardAggregator:
    """Read-only snapshots; no locking, results may trail concurrent writes."""

    def __init__(
        self, uow: IUnitOfWork, clock: Callable[[], datetime] = utc_now
    ) -> None:
        self.uow = uow
        self._clock = clock

    @staticmethod
    async def _status_counts(repos: Repositories) -> list[StatusCount]:
        counts = await repos.dashboard.count_by_status()
        return sorted(counts, key=lambda c: _STATUS_ORDER[c.status])

    async def _bottlenecks(
        self, repos: Repositories, limit: int, now: datetime
    ) -> list[Bottleneck]:
        rows = await repos.dashboard.oldest_in_statuses(ACTIVE_STATUSES, limit)
        return [
            Bottleneck(
                tracking_code=row.tracking_code,
                days_open=whole_days_between(row.created_at, now),
                office_name=row.office_name,
            )
            for row in rows
        ]

    @staticmethod
    async def _office_load(repos: Repositories) -> list[OfficeLoad]:
        return await repos.dashboard.load_by_office(TERMINAL_STATUSES)

    async def status_counts(self) -> list[StatusCount]:
        return await self.uow.run(self._status_counts)

    async def bottlenecks(self, limit: int = DEFAULT_BOTTLENECK_LIMIT) -> list[Bottleneck]:
        """Oldest open documents (recibido, derivado, en_revision), age in whole days."""
        now = self._clock()
        return await self.uow.run(lambda repos: self._bottlenecks(repos, limit, now))

    async def office_load(self) -> list[OfficeLoad]:
        """Non-terminal documents per holding office."""
        return await self.uow.run(self._office_load)

    async def snapshot(
        self, actor: ActorContext, limit: int = DEFAULT_BOTTLENECK_LIMIT
    ) -> DashboardSnapshot:
        ensure_capability(actor, Capability.VIEW_DASHBOARD)
        now = self._clock()

        async def work(repos: Repositories) -> DashboardSnapshot:
            return DashboardSnapshot(
                status_counts=await self._status_counts(repos),
                bottlenecks=await self._bottlenecks(repos, limit, now),
                office_load=await self._office_load(repos),
                generated_at=now,
            )

        return await self.uow.run(work)
