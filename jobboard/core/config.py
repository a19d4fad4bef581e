"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database (DATABASE_URL wins over the postgres_* parts)
    database_url: Optional[str] = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "jobboard"
    postgres_password: str = "password"
    postgres_db: str = "jobboard"
    sql_echo: bool = False

    # Sessions
    session_cookie_name: str = "jobboard_session"
    session_ttl_hours: int = 24

    # Password hashing cost (bcrypt log2 rounds)
    bcrypt_rounds: int = 10

    # Seed data
    seed_on_startup: bool = True
    admin_email: str = "admin@jobboard.com"
    admin_password: str = "admin123"

    # Files
    upload_dir: str = "uploads"
    public_dir: str = "public"

    # App
    environment: str = "development"
    log_level: str = "INFO"
    cors_origins: str = "*"

    @property
    def sqlalchemy_url(self) -> str:
        """Connection URL handed to SQLAlchemy"""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def allowed_origins(self) -> list:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
