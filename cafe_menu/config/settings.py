from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

from ..core.exceptions import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Storage
    database_url: str = "duckdb://./data/cafe_menu.duckdb"

    # JWT
    jwt_secret: str
    jwt_algorithm: str = "HS256"

    # development | production
    app_env: str = "development"

    # Gemini
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash-lite"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    assistant_timeout_seconds: float = 60.0
    cafe_name: str = "کافه ماین"

    # Uploads
    upload_dir: str = "./data/uploads"
    media_url_prefix: str = "/media"
    max_upload_bytes: int = 5 * 1024 * 1024

    # Seeding only
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None

    # API
    api_title: str = "Cafe Menu API"
    api_version: str = "1.0.0"
    api_prefix: str = "/api/v1"

    debug: bool = False
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"


def load_settings(**overrides) -> Settings:
    """Build the process-wide settings; a missing JWT secret is a hard error."""
    try:
        settings = Settings(**overrides)
    except PydanticValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(missing)}. "
            "JWT_SECRET must be set in the environment.",
            details={"fields": missing},
        ) from e

    if not settings.jwt_secret.strip():
        raise ConfigurationError("JWT_SECRET is not defined. Please set it in your environment.")
    return settings
