"""Auth API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from tramites.domain.enums import UserRole


class LoginRequest(BaseModel):
    """identifier: username, e-mail or DNI."""

    identifier: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    dni: str
    name: str
    last_name: str
    username: str
    role: UserRole
    office_id: str | None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
