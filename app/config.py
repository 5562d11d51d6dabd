"""Application configuration."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_SESSION_SECRET = "dev-session-secret"  # pragma: allowlist secret


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="CareDesk API", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    api_prefix: str = Field(default="/api", alias="API_PREFIX")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    reload: bool = Field(default=False, alias="RELOAD")

    # Storage
    storage_backend: str = Field(default="memory", alias="STORAGE_BACKEND")
    database_url: str = Field(default="", alias="DATABASE_URL")
    seed_demo_data: bool | None = Field(
        default=None,
        alias="SEED_DEMO_DATA",
        description="Seed the demo user and roster; defaults to on in development",
    )

    # Sessions
    session_backend: str = Field(default="memory", alias="SESSION_BACKEND")
    session_secret: str = Field(default="", alias="SESSION_SECRET")
    session_algorithm: str = Field(default="HS256", alias="SESSION_ALGORITHM")
    session_cookie_name: str = Field(default="caredesk_session", alias="SESSION_COOKIE_NAME")
    # Sessions are valid for 7 days from login
    session_ttl_seconds: int = Field(default=7 * 24 * 60 * 60, alias="SESSION_TTL_SECONDS", gt=0)
    auto_demo_login: bool = Field(
        default=False,
        alias="AUTO_DEMO_LOGIN",
        description="Bind the demo user to anonymous sessions (development only)",
    )

    # Redis
    redis_host: str = Field(default="localhost", alias="REDIS_HOST")
    redis_port: int = Field(default=6379, alias="REDIS_PORT")
    redis_username: str = Field(default="default", alias="REDIS_USERNAME")
    redis_password: str = Field(default="", alias="REDIS_PASSWORD")
    redis_decode_responses: bool = Field(default=True, alias="REDIS_DECODE_RESPONSES")

    # CORS
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")

    @model_validator(mode="after")
    def check_backends(self) -> "Settings":
        """Reject configurations that cannot start or are unsafe in production."""
        if self.storage_backend not in ("memory", "database"):
            raise ValueError("STORAGE_BACKEND must be 'memory' or 'database'")
        if self.session_backend not in ("memory", "redis"):
            raise ValueError("SESSION_BACKEND must be 'memory' or 'redis'")
        if self.storage_backend == "database" and not self.database_url:
            raise ValueError("DATABASE_URL is required when STORAGE_BACKEND=database")
        if self.is_production:
            if not self.session_secret:
                raise ValueError("SESSION_SECRET is required in production")
            if self.auto_demo_login:
                raise ValueError("AUTO_DEMO_LOGIN must be disabled in production")
        return self

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def signing_secret(self) -> str:
        """Secret used to sign session cookies."""
        return self.session_secret or DEV_SESSION_SECRET

    @property
    def should_seed_demo_data(self) -> bool:
        """Whether the demo dataset is loaded at startup."""
        if self.seed_demo_data is None:
            return self.is_development
        return self.seed_demo_data

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
