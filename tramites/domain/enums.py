"""Domain enumerations: document status, office type, roles, applicant data.

Values are persisted as plain strings; the database carries matching
CHECK constraints.
"""

from enum import Enum


class _ValuesMixin:
    """Adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]  # type: ignore[attr-defined]


class DocumentStatus(_ValuesMixin, str, Enum):
    """Lifecycle status of a document.

    creado: submitted through the public channel, not yet validated.
    recibido: validated and received by an office.
    derivado: moved to another office (repeatable).
    en_revision: set only by direct data correction; no operation moves here.
    atendido / archivado: closed by the holding office.
    rechazado: rejected during validation of a public submission.
    """

    CREADO = "creado"
    RECIBIDO = "recibido"
    DERIVADO = "derivado"
    EN_REVISION = "en_revision"
    ATENDIDO = "atendido"
    ARCHIVADO = "archivado"
    RECHAZADO = "rechazado"


class OfficeType(_ValuesMixin, str, Enum):
    """Position of an office in the municipal organisation chart."""

    ALCALDIA = "ALCALDIA"
    GERENCIA_MUNICIPAL = "GERENCIA_MUNICIPAL"
    OFICINA_GENERAL = "OFICINA_GENERAL"
    GERENCIA_LINEA = "GERENCIA_LINEA"
    UNIDAD = "UNIDAD"
    ORGANO_STAFF = "ORGANO_STAFF"


class UserRole(_ValuesMixin, str, Enum):
    """Staff role; gates which kinds of operation a user may attempt."""

    SUPER_ADMIN = "SUPER_ADMIN"
    MESA_DE_PARTES = "MESA_DE_PARTES"
    GERENTE = "GERENTE"
    JEFE_OFICINA = "JEFE_OFICINA"
    STAFF_OFICINA = "STAFF_OFICINA"


class ApplicantType(_ValuesMixin, str, Enum):
    """Natural person (DNI) or legal entity (RUC)."""

    PERSONA_NATURAL = "PERSONA_NATURAL"
    PERSONA_JURIDICA = "PERSONA_JURIDICA"


class DocumentType(_ValuesMixin, str, Enum):
    """Kind of paperwork submitted."""

    SOLICITUD = "SOLICITUD"
    OFICIO = "OFICIO"
    CARTA = "CARTA"
    INFORME = "INFORME"
    MEMORANDO = "MEMORANDO"
    RECLAMO = "RECLAMO"
    OTRO = "OTRO"
