"""Submission validation: runs before any upload or database call."""

from __future__ import annotations

from dataclasses import dataclass, replace

from email_validator import EmailNotValidError, validate_email

from tramites.application.dtos.document import (
    ApplicantSnapshot,
    DocumentIntake,
    UploadedFile,
)
from tramites.domain.exceptions import ValidationException
from tramites.shared.utils.sanitization import InputSanitizer, sanitize_text


def _required(value: str | None, field: str, label: str) -> str:
    cleaned = sanitize_text(value)
    if not cleaned:
        raise ValidationException(f"El campo {label} es obligatorio.", field=field)
    return cleaned


def _optional(value: str | None) -> str | None:
    cleaned = sanitize_text(value)
    return cleaned or None


def validate_intake(intake: DocumentIntake) -> DocumentIntake:
    """Return a cleaned copy of intake or raise ValidationException."""
    applicant = intake.applicant
    email = _required(applicant.email, "applicant_email", "correo electrónico")
    try:
        email = validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError as exc:
        raise ValidationException(
            "El correo electrónico no es válido.", field="applicant_email"
        ) from exc
    if isinstance(intake.page_count, bool) or not isinstance(intake.page_count, int):
        raise ValidationException("El número de folios debe ser un entero.", field="page_count")
    if intake.page_count < 1:
        raise ValidationException("El número de folios debe ser al menos 1.", field="page_count")
    cleaned_applicant = ApplicantSnapshot(
        applicant_type=applicant.applicant_type,
        identifier=_required(applicant.identifier, "applicant_identifier", "documento de identidad"),
        name=_required(applicant.name, "applicant_name", "nombre"),
        lastname=_required(applicant.lastname, "applicant_lastname", "apellido"),
        email=email,
        phone=_optional(applicant.phone),
        address=_optional(applicant.address),
    )
    return replace(
        intake,
        applicant=cleaned_applicant,
        subject=_required(intake.subject, "subject", "asunto"),
    )


@dataclass(frozen=True)
class UploadPolicy:
    """Limits applied to the single file attached at registration."""

    max_size: int
    allowed_types: tuple[str, ...] = ("*/*",)

    def _type_allowed(self, content_type: str) -> bool:
        wanted = content_type.split(";", 1)[0].strip().lower()
        for allowed in self.allowed_types:
            if allowed == "*/*" or allowed == wanted:
                return True
            if allowed.endswith("/*") and wanted.startswith(allowed[:-1]):
                return True
        return False

    def check_size(self, size: int | None) -> None:
        """Reject a file larger than max_size; None means the size is not known yet."""
        if size is not None and size > self.max_size:
            raise ValidationException(
                f"El archivo supera el tamaño máximo de {self.max_size} bytes.", field="file"
            )

    def check(self, upload: UploadedFile | None) -> UploadedFile:
        """Return upload with a sanitized filename or raise ValidationException."""
        if upload is None or not upload.filename:
            raise ValidationException('El archivo "file" es obligatorio.', field="file")
        try:
            filename = InputSanitizer.clean_filename(upload.filename)
        except ValueError as exc:
            raise ValidationException("Nombre de archivo inválido.", field="file") from exc
        if upload.size == 0:
            raise ValidationException("El archivo está vacío.", field="file")
        self.check_size(upload.size)
        if not self._type_allowed(upload.content_type):
            raise ValidationException(
                f"Tipo de archivo no permitido: {upload.content_type}", field="file"
            )
        return replace(upload, filename=filename)
