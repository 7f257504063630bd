"""Document, dashboard and office service dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tramites.api.v1.dependencies.db import get_transactional_session, get_uow
from tramites.application.interfaces.repositories import IUnitOfWork
from tramites.application.interfaces.services import IStorageService
from tramites.application.services.notification_dispatcher import NotificationDispatcher
from tramites.application.services.office_service import OfficeService
from tramites.application.use_cases.analytics import DashboardAggregator
from tramites.application.use_cases.documents import (
    DocumentLifecycleEngine,
    DocumentQueryService,
    TransactionalPersistenceCoordinator,
    UploadPolicy,
)
from tramites.core.config import Settings, get_settings
from tramites.infrastructure.external.email import NotificationFactory
from tramites.infrastructure.external.storage import StorageFactory
from tramites.infrastructure.persistence.repositories import OfficeRepository


def get_storage(request: Request) -> IStorageService:
    """Storage backend from app.state, built on first use when lifespan did not run."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        storage = StorageFactory.create_storage_service()
        request.app.state.storage = storage
    return storage


def get_dispatcher(request: Request) -> NotificationDispatcher:
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        dispatcher = NotificationDispatcher(NotificationFactory.create_notification_service())
        request.app.state.dispatcher = dispatcher
    return dispatcher


def get_upload_policy(settings: Annotated[Settings, Depends(get_settings)]) -> UploadPolicy:
    return UploadPolicy(
        max_size=settings.max_upload_size,
        allowed_types=tuple(settings.allowed_mime_type_list) or ("*/*",),
    )


def get_coordinator(
    uow: Annotated[IUnitOfWork, Depends(get_uow)],
    storage: Annotated[IStorageService, Depends(get_storage)],
    dispatcher: Annotated[NotificationDispatcher, Depends(get_dispatcher)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TransactionalPersistenceCoordinator:
    return TransactionalPersistenceCoordinator(
        uow,
        storage,
        dispatcher,
        max_code_attempts=settings.tracking_code_max_attempts,
    )


def get_lifecycle_engine(
    uow: Annotated[IUnitOfWork, Depends(get_uow)],
    coordinator: Annotated[TransactionalPersistenceCoordinator, Depends(get_coordinator)],
    upload_policy: Annotated[UploadPolicy, Depends(get_upload_policy)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> DocumentLifecycleEngine:
    return DocumentLifecycleEngine(
        uow,
        coordinator,
        upload_policy,
        intake_office_name=settings.intake_office_name,
    )


def get_query_service(uow: Annotated[IUnitOfWork, Depends(get_uow)]) -> DocumentQueryService:
    return DocumentQueryService(uow)


def get_dashboard_aggregator(
    uow: Annotated[IUnitOfWork, Depends(get_uow)],
) -> DashboardAggregator:
    return DashboardAggregator(uow)


def get_office_service(
    session: Annotated[AsyncSession, Depends(get_transactional_session)],
) -> OfficeService:
    return OfficeService(OfficeRepository(session))
