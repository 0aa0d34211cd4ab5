from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator
from typing import Literal

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    APP_NAME: str = "hospital-admin"
    ENV: Literal["local", "dev", "prod"] = "local"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    DEFAULT_HOSPITAL_ID: str = "1"

    # Durable overlay
    OVERLAY_PROVIDER: Literal["sql", "redis", "memory"] = "sql"
    OVERLAY_DSN: str = "sqlite+aiosqlite:///./hospital_admin_overlay.db"
    REDIS_URL: str | None = None
    REDIS_OVERLAY_PREFIX: str = "hospital-admin"

    EVENT_BUS_PROVIDER: str = "noop"  # noop | redis
    REDIS_STREAM: str | None = None  # default "hospital.events" if None
    REDIS_STREAM_MAXLEN: int = 10000

    # Multiplier on the per-operation delays; 0 turns latency off
    SIMULATED_LATENCY_SCALE: float = 1.0
    SEED_DEMO_DATA: bool = True

    RECEIVABLE_COLLECTION_DAYS: int = 90
    PROFILE_PICTURE_MAX_BYTES: int = 5 * 1024 * 1024
    HEALTH_DOCUMENT_PROCESSING_MS: int = 2500

    # Salary structure policy
    TAX_MIN_PERCENT: float = 5
    TAX_MAX_PERCENT: float = 15
    TAX_MIN_ACTIVE: int = 2
    TAX_MAX_ACTIVE: int = 3

    @field_validator("OVERLAY_DSN")
    @classmethod
    def _must_be_async(cls, v: str):
        if "+aiosqlite" not in v and "+asyncpg" not in v:
            raise ValueError("OVERLAY_DSN must use an async driver (sqlite+aiosqlite:// or postgresql+asyncpg://)")
        return v

    @model_validator(mode="after")
    def _tax_bounds(self):
        if self.TAX_MIN_PERCENT > self.TAX_MAX_PERCENT:
            raise ValueError("TAX_MIN_PERCENT must not exceed TAX_MAX_PERCENT")
        if self.TAX_MIN_ACTIVE > self.TAX_MAX_ACTIVE:
            raise ValueError("TAX_MIN_ACTIVE must not exceed TAX_MAX_ACTIVE")
        return self

settings = Settings()
