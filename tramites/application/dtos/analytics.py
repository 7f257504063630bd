"""DTOs for the dashboard (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from tramites.domain.enums import DocumentStatus


@dataclass(frozen=True)
class StatusCount:
    status: DocumentStatus
    count: int


@dataclass(frozen=True)
class AgingDocument:
    """Raw row for bottleneck computation (age computed by the aggregator)."""

    tracking_code: str
    office_name: str
    created_at: datetime


@dataclass(frozen=True)
class Bottleneck:
    """Oldest open document: tracking code, days open, holding office."""

    tracking_code: str
    days_open: int
    office_name: str


@dataclass(frozen=True)
class OfficeLoad:
    office_id: str
    office_name: str
    count: int


@dataclass(frozen=True)
class DashboardSnapshot:
    """Point-in-time, eventually consistent view across all documents."""

    status_counts: list[StatusCount]
    bottlenecks: list[Bottleneck]
    office_load: list[OfficeLoad]
    generated_at: datetime
