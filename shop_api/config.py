from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MONGO_URI: str
    MONGO_DB: str = "shop"

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Shared secret for item mutations; unset means every key is rejected
    API_KEY: str | None = None

    API_VERSION: str = "1.1"
    API_UPDATED_AT: str = "2026-01-23"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
