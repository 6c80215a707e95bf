# meditrack/config.py
import json
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=str(env_path), extra="ignore")

    MONGODB_URI: str = "mongodb://localhost:27017"
    DB_NAME: str = "meditrackDB"

    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    STRIPE_SECRET_KEY: str = ""
    STRIPE_API_URL: str = "https://api.stripe.com"
    PAYMENT_CURRENCY: str = "usd"

    # Allowed frontend origins: JSON list or comma separated
    CORS_ORIGINS: str = "http://localhost:5173"

    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origins(self) -> List[str]:
        raw = self.CORS_ORIGINS.strip()
        if raw.startswith("["):
            origins = json.loads(raw)
        else:
            origins = raw.split(",")
        return [str(o).strip() for o in origins if str(o).strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
