from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # Comma separated; kept as a string so the env var is not JSON-decoded
    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "http://localhost:8080,http://localhost:5173,*")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Where demo risk zones are seeded before the first user location arrives (Midtown Manhattan)
    DEFAULT_CENTER_LAT: float = float(os.getenv("DEFAULT_CENTER_LAT", "40.7484"))
    DEFAULT_CENTER_LNG: float = float(os.getenv("DEFAULT_CENTER_LNG", "-73.9857"))
    SEED_MOCK_ZONES: bool = os.getenv("SEED_MOCK_ZONES", "true").lower() in ("1", "true", "yes")

    class Config:
        case_sensitive = True

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

@lru_cache()
def get_settings():
    return Settings()
