"""Bearer authentication and role capability dependencies."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tramites.api.v1.dependencies.db import get_uow
from tramites.application.dtos.actor import ActorContext
from tramites.application.interfaces.repositories import IUnitOfWork
from tramites.application.services.authorization_service import (
    Capability,
    ensure_capability,
)
from tramites.application.use_cases.auth import AuthenticationService
from tramites.domain.exceptions import AuthenticationException
from tramites.infrastructure.security import create_access_token, verify_password, verify_token

_bearer = HTTPBearer(auto_error=False)


def get_auth_service(uow: Annotated[IUnitOfWork, Depends(get_uow)]) -> AuthenticationService:
    return AuthenticationService(
        uow,
        verify_password=verify_password,
        issue_token=create_access_token,
    )


async def get_current_actor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
    auth_svc: Annotated[AuthenticationService, Depends(get_auth_service)],
) -> ActorContext:
    """Verified ActorContext for the bearer token; 401 when missing or invalid."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("No autenticado")
    try:
        user_id = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException("Token inválido o expirado") from e
    return await auth_svc.resolve_actor(user_id)


CurrentActor = Annotated[ActorContext, Depends(get_current_actor)]


def require_capability(capability: Capability):
    """Dependency factory: authenticated actor whose role grants capability."""

    async def _require(actor: CurrentActor) -> ActorContext:
        ensure_capability(actor, capability)
        return actor

    return _require
