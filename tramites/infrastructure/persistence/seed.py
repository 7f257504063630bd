"""Reference data: the municipal organisation chart and one user per role.

Idempotent. Offices are matched by name and re-parented when their parent
differs; users are matched by username and left untouched when present.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tramites.application.dtos.office import OfficeCreate
from tramites.domain.enums import OfficeType, UserRole
from tramites.infrastructure.persistence.models.user import User
from tramites.infrastructure.persistence.repositories import (
    OfficeRepository,
    UserRepository,
)
from tramites.infrastructure.security.password import hash_password
from tramites.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PASSWORD = "123456"
MAIL_DOMAIN = "sanjeronimo.gob.pe"


@dataclass(frozen=True)
class OfficeSeed:
    name: str
    acronym: str
    office_type: OfficeType
    parent: str | None = None


@dataclass(frozen=True)
class UserSeed:
    username: str
    email_local: str
    dni: str
    name: str
    last_name: str
    role: UserRole
    office: str


ALCALDIA = "ALCALDÍA"
GERENCIA_MUNICIPAL = "GERENCIA MUNICIPAL"
SECRETARIA_GENERAL = "SECRETARÍA GENERAL"
ADMINISTRACION = "OFICINA GENERAL DE ADMINISTRACIÓN"
UTICS = "UNIDAD DE TECNOLOGÍAS DE INFORMACIÓN Y COMUNICACIONES"
DESARROLLO_URBANO = "GERENCIA DE DESARROLLO URBANO Y RURAL"
MESA_DE_PARTES = "MESA_DE_PARTES"

# Parents are listed before their children.
OFFICES: tuple[OfficeSeed, ...] = (
    OfficeSeed(ALCALDIA, "ALC", OfficeType.ALCALDIA),
    OfficeSeed(GERENCIA_MUNICIPAL, "GM", OfficeType.GERENCIA_MUNICIPAL, ALCALDIA),
    OfficeSeed("ÓRGANO DE CONTROL INSTITUCIONAL", "OCI", OfficeType.ORGANO_STAFF, ALCALDIA),
    OfficeSeed("PROCURADURÍA PÚBLICA MUNICIPAL", "PPM", OfficeType.ORGANO_STAFF, ALCALDIA),
    OfficeSeed(SECRETARIA_GENERAL, "SG", OfficeType.OFICINA_GENERAL, ALCALDIA),
    OfficeSeed(
        "OFICINA GENERAL DE ASESORÍA JURÍDICA",
        "OGAJ",
        OfficeType.OFICINA_GENERAL,
        GERENCIA_MUNICIPAL,
    ),
    OfficeSeed(
        "OFICINA GENERAL DE PLANEAMIENTO Y PRESUPUESTO",
        "OGPP",
        OfficeType.OFICINA_GENERAL,
        GERENCIA_MUNICIPAL,
    ),
    OfficeSeed(ADMINISTRACION, "OGA", OfficeType.OFICINA_GENERAL, GERENCIA_MUNICIPAL),
    OfficeSeed(MESA_DE_PARTES, "MP", OfficeType.UNIDAD, SECRETARIA_GENERAL),
    OfficeSeed("UNIDAD DE TRÁMITE DOCUMENTARIO", "UTD", OfficeType.UNIDAD, SECRETARIA_GENERAL),
    OfficeSeed("UNIDAD DE REGISTRO CIVIL", "URC", OfficeType.UNIDAD, SECRETARIA_GENERAL),
    OfficeSeed("UNIDAD DE LOGÍSTICA", "LOG", OfficeType.UNIDAD, ADMINISTRACION),
    OfficeSeed("UNIDAD DE RECURSOS HUMANOS", "RRHH", OfficeType.UNIDAD, ADMINISTRACION),
    OfficeSeed(UTICS, "UTICS", OfficeType.UNIDAD, ADMINISTRACION),
    OfficeSeed(DESARROLLO_URBANO, "GDUR", OfficeType.GERENCIA_LINEA, GERENCIA_MUNICIPAL),
    OfficeSeed(
        "GERENCIA DE DESARROLLO SOCIAL", "GDS", OfficeType.GERENCIA_LINEA, GERENCIA_MUNICIPAL
    ),
    OfficeSeed(
        "GERENCIA DE SERVICIOS PÚBLICOS MUNICIPALES",
        "GSPM",
        OfficeType.GERENCIA_LINEA,
        GERENCIA_MUNICIPAL,
    ),
    OfficeSeed(
        "GERENCIA DE DESARROLLO ECONÓMICO",
        "GDE",
        OfficeType.GERENCIA_LINEA,
        GERENCIA_MUNICIPAL,
    ),
)

USERS: tuple[UserSeed, ...] = (
    UserSeed("admin", "admin", "00000000", "Super", "Administrador", UserRole.SUPER_ADMIN, UTICS),
    UserSeed(
        "mp_recepcion",
        "mesadepartes",
        "11111111",
        "María",
        "Recepción",
        UserRole.MESA_DE_PARTES,
        MESA_DE_PARTES,
    ),
    UserSeed(
        "gerente_municipal",
        "gerencia",
        "22222222",
        "Carlos",
        "Gerente",
        UserRole.GERENTE,
        GERENCIA_MUNICIPAL,
    ),
    UserSeed(
        "alcalde", "alcaldia", "33333333", "Sr. Alcalde", "San Jerónimo", UserRole.GERENTE, ALCALDIA
    ),
    UserSeed(
        "jefe_utics", "utics", "44444444", "Ingeniero", "Sistemas", UserRole.JEFE_OFICINA, UTICS
    ),
    UserSeed(
        "gerente_obras",
        "gdur",
        "55555555",
        "Arquitecto",
        "Obras",
        UserRole.GERENTE,
        DESARROLLO_URBANO,
    ),
    UserSeed(
        "asistente_obras",
        "asistente_gdur",
        "66666666",
        "Juan",
        "Asistente",
        UserRole.STAFF_OFICINA,
        DESARROLLO_URBANO,
    ),
)


async def _seed_offices(session: AsyncSession) -> dict[str, str]:
    repo = OfficeRepository(session)
    ids: dict[str, str] = {}
    for seed in OFFICES:
        parent_id = ids[seed.parent] if seed.parent else None
        existing = await repo.get_by_name(seed.name)
        if existing is None:
            created = await repo.create(
                OfficeCreate(
                    name=seed.name,
                    acronym=seed.acronym,
                    office_type=seed.office_type,
                    parent_office_id=parent_id,
                )
            )
            ids[seed.name] = created.id
            logger.info("Seeded office %s (%s)", seed.name, seed.acronym)
            continue
        if existing.parent_office_id != parent_id:
            await repo.set_parent(existing.id, parent_id)
        ids[seed.name] = existing.id
    return ids


async def _seed_users(
    session: AsyncSession, office_ids: dict[str, str], password: str
) -> int:
    repo = UserRepository(session)
    password_hash = hash_password(password)
    created = 0
    for seed in USERS:
        if await repo.get_credentials(seed.username) is not None:
            continue
        await repo.create(
            User(
                email=f"{seed.email_local}@{MAIL_DOMAIN}",
                dni=seed.dni,
                name=seed.name,
                last_name=seed.last_name,
                username=seed.username,
                password_hash=password_hash,
                role=seed.role.value,
                office_id=office_ids[seed.office],
                is_active=True,
            )
        )
        created += 1
        logger.info("Seeded user %s (%s)", seed.username, seed.role.value)
    return created


async def seed_reference_data(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    password: str = DEFAULT_PASSWORD,
) -> dict[str, str]:
    """Create or align the organisation chart and seed users in one transaction.

    Returns office ids by name.
    """
    async with session_factory() as session:
        async with session.begin():
            office_ids = await _seed_offices(session)
            created = await _seed_users(session, office_ids, password)
    logger.info("Seed complete: %d offices, %d new users", len(office_ids), created)
    return office_ids
