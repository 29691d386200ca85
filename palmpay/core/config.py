"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./palmpay.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    password_reset_expire_minutes: int = 30
    email_verification_expire_minutes: int = 60 * 24


class TransferSettings(BaseModel):
    currency: str = "PKR"
    currency_symbol: str = "Rs."
    # Rs. 1,000,000,000 per transfer.
    max_amount_cents: int = Field(default=100_000_000_000, ge=1)
    note_max_length: int = Field(default=100, ge=0)
    # Applies to the atomic balance step only; None disables the guard.
    timeout_seconds: Optional[float] = Field(default=10.0, gt=0)


class NotificationSettings(BaseModel):
    history_limit: int = 50
    sound: str = "new_notification_09_352705.mp3"


class RealtimeSettings(BaseModel):
    queue_size: int = Field(default=100, ge=1)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PALMPAY_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Palm Pay"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    transfers: TransferSettings = TransferSettings()
    notifications: NotificationSettings = NotificationSettings()
    realtime: RealtimeSettings = RealtimeSettings()
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


@lru_cache()
def get_settings() -> Settings:
    return Settings()
