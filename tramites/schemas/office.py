"""Office API schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tramites.domain.enums import OfficeType


class OfficeCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    acronym: str = Field(..., min_length=1, max_length=32)
    office_type: OfficeType
    parent_office_id: str | None = None


class OfficeReparentRequest(BaseModel):
    """parent_office_id null makes the office a root."""

    parent_office_id: str | None = None


class OfficeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    acronym: str
    office_type: OfficeType
    parent_office_id: str | None
    created_at: datetime


class OfficeTreeOut(BaseModel):
    id: str
    name: str
    acronym: str
    office_type: OfficeType
    children: list[OfficeTreeOut] = Field(default_factory=list)
