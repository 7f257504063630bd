"""Bearer tokens for staff sessions (python-jose).

The token only carries the user id; role and office are re-read on every
request so a reassignment takes effect without re-login.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from tramites.core.config import get_settings
from tramites.shared.utils.datetime import utc_now


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Encode a signed token whose subject is user_id."""
    settings = get_settings()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    now = utc_now()
    claims: dict[str, Any] = {"sub": user_id, "iat": now, "exp": now + ttl}
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> str:
    """Return the subject (user id) of a valid token.

    Raises:
        ValueError: If the token is malformed, expired, or has no subject.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise ValueError("Token missing required claim: sub")
    return subject
