"""Dashboard API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from tramites.domain.enums import DocumentStatus


class StatusCountOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: DocumentStatus
    count: int


class BottleneckOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tracking_code: str
    days_open: int
    office_name: str


class OfficeLoadOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    office_id: str
    office_name: str
    count: int


class DashboardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status_counts: list[StatusCountOut]
    bottlenecks: list[BottleneckOut]
    office_load: list[OfficeLoadOut]
    generated_at: datetime
