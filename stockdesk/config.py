# stockdesk/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Literal, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    # "memory" keeps everything in process with seeded mock data,
    # "sql" stores collections through SQLAlchemy
    STORAGE_BACKEND: Literal["memory", "sql"] = "memory"
    DATABASE_URL: str = "sqlite:///./stockdesk.db"

    # Artificial delay applied by the in-memory store on every call
    SIMULATED_LATENCY_MS: int = 300
    SEED_DATA: bool = True

    EXPIRING_HORIZON_DAYS: int = 30
    TOP_PRODUCTS_LIMIT: int = 10

    LOG_LEVEL: str = "INFO"
    FRONTEND_URL: Optional[str] = None

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
