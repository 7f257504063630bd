"""Staff sign-in and actor resolution."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from tramites.application.dtos.actor import ActorContext
from tramites.application.dtos.office import UserResult
from tramites.application.interfaces.repositories import IUnitOfWork, Repositories
from tramites.domain.exceptions import AuthenticationException
from tramites.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LoginResult:
    access_token: str
    user: UserResult


class AuthenticationService:
    """Checks credentials and turns a token subject back into an ActorContext.

    Role and office are always read from the database, never from the token.
    """

    def __init__(
        self,
        uow: IUnitOfWork,
        verify_password: Callable[[str, str], bool],
        issue_token: Callable[[str], str],
    ) -> None:
        self.uow = uow
        self._verify_password = verify_password
        self._issue_token = issue_token

    async def login(self, identifier: str, password: str) -> LoginResult:
        """identifier may be the username, e-mail or DNI."""

        async def work(repos: Repositories):
            return await repos.users.get_credentials(identifier)

        credentials = await self.uow.run(work)
        if credentials is None or not self._verify_password(
            password, credentials.password_hash
        ):
            logger.warning("Failed sign-in for identifier=%r", identifier[:64])
            raise AuthenticationException()
        if not credentials.user.is_active:
            logger.warning("Sign-in attempt by inactive user=%s", credentials.user.id)
            raise AuthenticationException("Usuario inactivo")
        logger.info("User signed in: id=%s role=%s", credentials.user.id, credentials.user.role.value)
        return LoginResult(
            access_token=self._issue_token(credentials.user.id),
            user=credentials.user,
        )

    async def resolve_actor(self, user_id: str) -> ActorContext:
        async def work(repos: Repositories) -> UserResult | None:
            return await repos.users.get_by_id(user_id)

        user = await self.uow.run(work)
        if user is None or not user.is_active:
            raise AuthenticationException("Sesión inválida")
        return ActorContext(user_id=user.id, role=user.role, office_id=user.office_id)
