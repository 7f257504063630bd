"""Dashboard API: aggregated document statistics for managers."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from tramites.api.v1.dependencies import CurrentActor, get_dashboard_aggregator
from tramites.application.use_cases.analytics import (
    DEFAULT_BOTTLENECK_LIMIT,
    DashboardAggregator,
)
from tramites.schemas.analytics import DashboardResponse

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    actor: CurrentActor,
    aggregator: Annotated[DashboardAggregator, Depends(get_dashboard_aggregator)],
    limit: Annotated[int, Query(ge=1, le=50)] = DEFAULT_BOTTLENECK_LIMIT,
):
    snapshot = await aggregator.snapshot(actor, limit=limit)
    return DashboardResponse.model_validate(snapshot, from_attributes=True)
