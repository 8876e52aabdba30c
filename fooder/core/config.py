"""Application settings loaded from environment / .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Database ──────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./fooder.db"

    # ── Tenancy ───────────────────────────────────────────
    tenant_id: str = "DEFAULT"

    # ── PII ───────────────────────────────────────────────
    # Comma-separated Fernet keys. The first one seals, all of them unseal.
    encryption_keys: str = ""  # MUST be set in production
    # Comma-separated SHA-256 email fingerprints granted the admin role
    admin_email_hashes: str = ""

    # ── Identity provider ─────────────────────────────────
    jwt_secret_key: str = ""  # MUST be set in production
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = None
    jwt_issuer: str | None = None
    provisioning_secret: str = ""  # shared with the identity provider callback

    # ── HTTP ──────────────────────────────────────────────
    allowed_origins: str = "*"
    log_level: str = "INFO"

    @property
    def admin_fingerprints(self) -> frozenset[str]:
        return frozenset(h.strip() for h in self.admin_email_hashes.split(",") if h.strip())


@lru_cache
def get_settings() -> Settings:
    return Settings()
