"""Auth API: staff sign-in issuing bearer tokens."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from tramites.api.v1.dependencies import CurrentActor, get_auth_service
from tramites.application.use_cases.auth import AuthenticationService
from tramites.core.limiter import limit_login
from tramites.schemas.auth import LoginRequest, TokenResponse, UserOut

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limit_login
async def login(
    request: Request,
    body: LoginRequest,
    auth_svc: Annotated[AuthenticationService, Depends(get_auth_service)],
):
    """Sign in with username, e-mail or DNI plus password."""
    result = await auth_svc.login(body.identifier, body.password)
    return TokenResponse(
        access_token=result.access_token,
        user=UserOut.model_validate(result.user, from_attributes=True),
    )


@router.get("/me")
async def me(actor: CurrentActor):
    """Identity the server resolved from the bearer token."""
    return {
        "user_id": actor.user_id,
        "role": actor.role.value,
        "office_id": actor.office_id,
    }
