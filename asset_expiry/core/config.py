"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

InvariantPolicy = Literal["abort", "skip"]
HandlerFailurePolicy = Literal["isolate", "fail_run"]


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./assets.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    create_tables: bool = True


class ExpirationSettings(BaseModel):
    """Policies for the expiration checker.

    ``invariant_policy`` left unset resolves from the environment: production
    skips offending assets, every other environment aborts the run.
    """

    invariant_policy: Optional[InvariantPolicy] = None
    handler_failure_policy: HandlerFailurePolicy = "isolate"
    interval_seconds: int = Field(default=0, ge=0)
    validate_on_startup: bool = True


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Asset Expiration Server"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    expiration: ExpirationSettings = ExpirationSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def invariant_policy(self) -> InvariantPolicy:
        if self.expiration.invariant_policy is not None:
            return self.expiration.invariant_policy
        return "skip" if self.environment == "production" else "abort"

    @property
    def handler_failure_policy(self) -> HandlerFailurePolicy:
        return self.expiration.handler_failure_policy

    @property
    def check_interval_seconds(self) -> int:
        return self.expiration.interval_seconds


@lru_cache()
def get_settings() -> Settings:
    return Settings()
