"""Application configuration using pydantic-settings."""

import warnings
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_SECRET_DEFAULT = "change-me-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "TinyHouse"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # Server
    host: str = "0.0.0.0"
    port: int = 9000

    # Database (MongoDB)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "tinyhouse"

    # Viewer cookie signing
    secret_key: str = _INSECURE_SECRET_DEFAULT
    jwt_algorithm: str = "HS256"
    viewer_cookie_max_age_days: int = 365

    # Google OAuth + Geocoding
    google_client_id: str = ""
    google_client_secret: str = ""
    google_redirect_uri: str = "http://localhost:3000/login"
    google_geocode_key: str = ""

    # Cloudinary
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    cloudinary_folder: str = "TH_Assets"

    # Stripe Connect
    stripe_secret_key: str = ""
    stripe_client_id: str = ""
    stripe_application_fee_rate: float = 0.05

    # Frontend
    client_dir: Path = Path("client")
    frontend_url: str = "http://localhost:3000"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:9000",
    ]

    @model_validator(mode="after")
    def _ensure_frontend_in_cors(self) -> "Settings":
        """Ensure the configured frontend_url is always in cors_origins."""
        if self.frontend_url and self.frontend_url not in self.cors_origins:
            self.cors_origins.append(self.frontend_url)
        return self

    @model_validator(mode="after")
    def _validate_secrets(self) -> "Settings":
        """Reject the insecure cookie secret in production and warn in development."""
        if self.secret_key == _INSECURE_SECRET_DEFAULT:
            if self.environment == "production":
                raise ValueError(
                    "SECRET_KEY must be set to a strong random value in production. "
                    'Generate one with: python -c "import secrets; print(secrets.token_urlsafe(64))"'
                )
            warnings.warn(
                "Using default SECRET_KEY, which is only acceptable for local development. "
                "Set SECRET_KEY in your .env file.",
                UserWarning,
                stacklevel=1,
            )
        return self

    @property
    def secure_cookies(self) -> bool:
        """Only mark cookies ``Secure`` when served over HTTPS in production."""
        return self.environment == "production"


settings = Settings()
