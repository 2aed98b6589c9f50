"""
Configuration management for JobHub.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    database_url: str = "sqlite:///./jobhub.db"

    # Auth
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 30 * 24 * 60
    bcrypt_rounds: int = 12
    allow_admin_registration: bool = False

    # Uploads
    upload_dir: str = "./uploads"
    upload_url_prefix: str = "/uploads"
    max_upload_size: int = 5 * 1024 * 1024  # 5 MB
    max_files_per_request: int = 5
    allowed_extensions: str = "pdf,jpg,jpeg,png,doc,docx,txt"

    # HTTP
    cors_origins: str = "http://localhost:3000"
    rate_limit_enabled: bool = True
    auth_rate_limit: str = "10/minute"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars

    @property
    def allowed_extension_set(self) -> set[str]:
        return {e.strip().lower().lstrip(".") for e in self.allowed_extensions.split(",") if e.strip()}

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
