# jeevanpath/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
Connection strings must come from the environment, nothing is hard-coded here.
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "postgresql://localhost:5432/jeevanpath"

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_IP: str = "0.0.0.0"
    BACKEND_PORT: int = 4000

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to enable auth on API endpoints

    # ── Emergency dispatch ────────────────────────────────────────────────
    PRIMARY_RADIUS_METERS: int = 15000       # First provider search pass
    ESCALATION_RADIUS_METERS: int = 25000    # Second pass when too few providers were reached
    MIN_PROVIDERS_NOTIFIED: int = 2
    PROVIDER_RESOURCE_LIMIT: int = 15        # Resources considered per provider search
    NEARBY_RESOURCE_LIMIT: int = 10          # Resources returned to the requester
    RESOURCE_NOTIFICATION_LIMIT: int = 5     # "resource found" notifications per alert
    DEFAULT_MAX_DISTANCE_KM: int = 10
    ALERT_TTL_HOURS: int = 4
    CONTACT_CONCURRENCY: int = 5             # Parallel provider call/SMS attempts
    # Not the historical default: False restores re-alerting providers found by both passes
    ESCALATION_SKIPS_ALERTED_PROVIDERS: bool = True

    # ── Simulated side channels ───────────────────────────────────────────
    SIMULATED_CALL_DELAY_SECONDS: float = 1.0
    SIMULATED_SMS_DELAY_SECONDS: float = 0.5

    # ── Expiry ────────────────────────────────────────────────────────────
    EXPIRY_SWEEP_INTERVAL_SECONDS: int = 60

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    @field_validator("DATABASE_URL")
    @classmethod
    def database_url_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set")
        return v.strip()

    @field_validator(
        "PRIMARY_RADIUS_METERS", "ESCALATION_RADIUS_METERS", "MIN_PROVIDERS_NOTIFIED",
        "PROVIDER_RESOURCE_LIMIT", "NEARBY_RESOURCE_LIMIT", "RESOURCE_NOTIFICATION_LIMIT", "DEFAULT_MAX_DISTANCE_KM",
        "ALERT_TTL_HOURS", "CONTACT_CONCURRENCY", "EXPIRY_SWEEP_INTERVAL_SECONDS",
    )
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @field_validator("SIMULATED_CALL_DELAY_SECONDS", "SIMULATED_SMS_DELAY_SECONDS")
    @classmethod
    def delay_not_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("delay cannot be negative")
        return v

    @model_validator(mode="after")
    def escalation_wider_than_primary(self):
        if self.ESCALATION_RADIUS_METERS <= self.PRIMARY_RADIUS_METERS:
            raise ValueError("ESCALATION_RADIUS_METERS must be larger than PRIMARY_RADIUS_METERS")
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
