"""Service settings read from the environment and an optional .env file.

DATABASE_URL and SECRET_KEY have no usable default. Storage and mail
backends are checked against the options the factories understand.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_STORAGE_BACKENDS = frozenset({"local", "s3"})
_MAIL_BACKENDS = frozenset({"log", "smtp"})


class Settings(BaseSettings):
    """Environment variables map to fields case-insensitively (SECRET_KEY -> secret_key)."""

    # App
    app_name: str = "tramites"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Storage
    storage_backend: str = "local"
    storage_root: str = "/var/tramites/storage"
    storage_base_url: str | None = None
    s3_bucket: str | None = None
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None
    max_upload_size: int = 20 * 1024 * 1024  # 20MB
    allowed_mime_types: str = "application/pdf,image/jpeg,image/png"

    # Intake
    intake_office_name: str = "MESA_DE_PARTES"
    tracking_code_max_attempts: int = 5

    # Mail
    mail_backend: str = "log"
    mail_host: str | None = None
    mail_port: int = 587
    mail_use_tls: bool = True
    mail_user: str | None = None
    mail_password: SecretStr | None = None
    mail_from: str = "no-reply@tramites.local"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"
    correlation_id_header: str = "X-Correlation-ID"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def allowed_mime_type_list(self) -> list[str]:
        """Parsed allowed_mime_types; "*/*" means any type."""
        return [m.strip().lower() for m in self.allowed_mime_types.split(",") if m.strip()]

    @model_validator(mode="after")
    def check_required(self) -> "Settings":
        missing = [
            name
            for name, present in (
                ("DATABASE_URL", bool(self.database_url)),
                ("SECRET_KEY", bool(self.secret_key.get_secret_value())),
            )
            if not present
        ]
        if missing:
            raise ValueError(f"Missing required settings: {', '.join(missing)}")
        if self.tracking_code_max_attempts < 1:
            raise ValueError("TRACKING_CODE_MAX_ATTEMPTS must be at least 1.")
        return self

    @model_validator(mode="after")
    def check_backends(self) -> "Settings":
        if self.storage_backend not in _STORAGE_BACKENDS:
            raise ValueError(
                f"STORAGE_BACKEND must be one of {sorted(_STORAGE_BACKENDS)}, "
                f"got {self.storage_backend!r}"
            )
        if self.storage_backend == "s3" and not self.s3_bucket:
            raise ValueError("S3_BUCKET is required for the s3 storage backend.")
        if self.mail_backend not in _MAIL_BACKENDS:
            raise ValueError(
                f"MAIL_BACKEND must be one of {sorted(_MAIL_BACKENDS)}, "
                f"got {self.mail_backend!r}"
            )
        if self.mail_backend == "smtp" and not self.mail_host:
            raise ValueError("MAIL_HOST is required for the smtp mail backend.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Settings instance shared by the process.

    Built lazily; tests set the environment first and call
    get_settings.cache_clear().
    """
    return Settings()
