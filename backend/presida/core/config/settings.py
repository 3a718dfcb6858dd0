"""Application settings.

All values are read from the process environment (and an optional ``.env``
file). Credentials for the identity and payment providers are deliberately
optional: a missing value only surfaces when the provider is first called.
"""

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from presida.core.config.enums import Environment


class Settings(BaseSettings):
    """Presida backend settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Presida Billing"
    ENVIRONMENT: Environment = Environment.LOCAL
    LOCAL_DEVELOPMENT: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "postgres"
    POSTGRES_SSLMODE: str = "prefer"
    SQLALCHEMY_ASYNC_DATABASE_URI: Optional[str] = None
    db_pool_size: int = Field(default=5, alias="DB_POOL_SIZE")
    db_pool_max_overflow: int = Field(default=10, alias="DB_POOL_MAX_OVERFLOW")

    # Identity provider (Supabase GoTrue admin API)
    SUPABASE_URL: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    SUPABASE_JWT_SECRET: Optional[str] = None
    IDENTITY_HTTP_TIMEOUT: float = 10.0

    # Payment provider (Stripe)
    STRIPE_ENABLED: bool = True
    STRIPE_SECRET_KEY: Optional[str] = None
    STRIPE_WEBHOOK_SECRET: Optional[str] = None

    # Checkout
    CHECKOUT_DEFAULT_ORIGIN: str = "https://app.presida.club"

    # Force logout fan-out width
    FORCE_LOGOUT_CONCURRENCY: int = Field(default=10, gt=0)

    @model_validator(mode="after")
    def assemble_db_connection(self) -> "Settings":
        """Build the async database URI from the POSTGRES_* parts when not given."""
        if not self.SQLALCHEMY_ASYNC_DATABASE_URI:
            self.SQLALCHEMY_ASYNC_DATABASE_URI = (
                f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
                f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )
        return self

    @property
    def is_local(self) -> bool:
        """Whether log output should be human-readable rather than JSON."""
        return self.LOCAL_DEVELOPMENT or self.ENVIRONMENT == Environment.LOCAL
