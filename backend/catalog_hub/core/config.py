import os
from typing import Optional
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel


load_dotenv()


def _parse_delays(raw: str) -> list[float]:
    return [float(part) for part in raw.split(",") if part.strip()]


class Settings(BaseModel):
    # 4over print-products API
    fourover_public_key: Optional[str] = os.getenv("FOUROVER_PUBLIC_KEY")
    fourover_private_key: Optional[str] = os.getenv("FOUROVER_PRIVATE_KEY")
    fourover_base_url: str = os.getenv("FOUROVER_BASE_URL", "https://api.4over.com")
    fourover_timeout_seconds: float = float(os.getenv("FOUROVER_TIMEOUT_SECONDS", "30"))

    # Retry policy for transient 4over failures
    fourover_max_attempts: int = int(os.getenv("FOUROVER_MAX_ATTEMPTS", "3"))
    fourover_retry_delays: list[float] = _parse_delays(os.getenv("FOUROVER_RETRY_DELAYS", "1,2"))

    # Pacing between remote calls during a sync run
    sync_item_delay_seconds: float = float(os.getenv("SYNC_ITEM_DELAY_SECONDS", "0.2"))
    sync_page_delay_seconds: float = float(os.getenv("SYNC_PAGE_DELAY_SECONDS", "0.1"))
    # Business Cards
    sync_default_category_id: str = os.getenv(
        "SYNC_DEFAULT_CATEGORY_ID", "08a9625a-4152-40cf-9007-b2bbb349efec"
    )

    # Supabase
    supabase_url: str | None = os.getenv("SUPABASE_URL")
    supabase_service_role_key: str | None = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Celery
    celery_broker_url: str = os.getenv("CELERY_BROKER_URL", os.getenv("REDIS_URL", "redis://localhost:6379/0"))
    celery_result_backend: str = os.getenv("CELERY_RESULT_BACKEND", os.getenv("REDIS_URL", "redis://localhost:6379/0"))


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = Settings()
