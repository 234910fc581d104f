from typing import List, Optional

from pydantic import (
    Field,
    SecretStr,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

LOCAL_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


class Settings(BaseSettings):
    PROJECT_NAME: str = "FormRelay"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # --- Environment & Debug ---
    ENVIRONMENT: str = "local"
    DEBUG: bool = False  # Default to False for security
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # --- Mail account ---
    EMAIL_USER: Optional[str] = None
    EMAIL_PASS: Optional[SecretStr] = None
    MAIL_RECIPIENT: Optional[str] = None  # Falls back to EMAIL_USER
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USE_TLS: bool = True
    MAIL_TIMEOUT_SECONDS: float = 30.0

    # --- Uploads ---
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024  # 5MB
    RETAIN_UPLOADS: bool = False

    # --- CORS ---
    ALLOWED_ORIGINS: List[str] = Field(
        default_factory=list,
        validate_default=True,
        description="List of allowed CORS origins. Configure in .env",
    )
    ALLOWED_METHODS: List[str] = Field(
        default_factory=lambda: ["GET", "POST", "OPTIONS"],
        description="Allowed HTTP methods for CORS.",
    )
    ALLOWED_HEADERS: List[str] = Field(
        default_factory=lambda: [
            "Content-Type", "X-Request-ID", "Accept", "Accept-Language",
        ],
        description="Allowed HTTP headers for CORS.",
    )

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def default_allowed_origins(
        cls, v: Optional[List[str]], info: ValidationInfo
    ) -> Optional[List[str]]:
        env = info.data.get("ENVIRONMENT") or "local"
        empty = (
            v is None
            or (isinstance(v, str) and v.strip() in ("", "[]"))
            or (isinstance(v, list) and len(v) == 0)
        )
        if empty:
            if env == "production":
                raise ValueError(
                    "ALLOWED_ORIGINS must be set explicitly in production"
                )
            return list(LOCAL_ORIGINS)
        return v

    @model_validator(mode="after")
    def validate_mail_account(self) -> "Settings":
        if self.ENVIRONMENT == "production" and not self.mail_configured:
            raise ValueError(
                "EMAIL_USER and EMAIL_PASS must be set for production deployments"
            )
        return self

    @property
    def mail_recipient(self) -> Optional[str]:
        return self.MAIL_RECIPIENT or self.EMAIL_USER

    @property
    def mail_configured(self) -> bool:
        return bool(self.EMAIL_USER and self.EMAIL_PASS)


settings = Settings()
