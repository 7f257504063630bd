"""Acting user context passed explicitly into every core operation."""

from dataclasses import dataclass

from tramites.domain.enums import UserRole


@dataclass(frozen=True)
class ActorContext:
    """Verified identity of the caller: who, with which role, on behalf of which office."""

    user_id: str
    role: UserRole
    office_id: str | None = None
