# backend/delivery_dates/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repo root


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/delivery.db"
    redis_url: str = "redis://localhost:6379/0"

    # Shared secret used by Shopify to sign app proxy requests and webhooks
    shopify_api_secret: str = ""

    # Token the admin UI sends as X-Internal-Token for settings and blackouts
    admin_token: str = ""

    override_cache_ttl_seconds: int = 600
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # Relative sqlite paths are resolved against the repo root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url


settings = Settings()
