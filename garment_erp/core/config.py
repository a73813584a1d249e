import os
import logging
from pydantic import BaseModel, Field
from typing import List
from dotenv import load_dotenv

load_dotenv()

class StorageSettings(BaseModel):
    root_dir: str = Field(default=os.getenv("STORAGE_DIR", "./storage"))
    public_url: str = Field(default=os.getenv("STORAGE_PUBLIC_URL", "http://localhost:8000/storage"))
    bucket: str = Field(default=os.getenv("STORAGE_BUCKET", "factory-images"))

class Config(BaseModel):
    app_name: str = "Garment Factory ERP"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./factory.db")

    # File storage for worker/employee documents and product patterns
    storage: StorageSettings = StorageSettings()

    # CORS: comma-separated origins loaded from env
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://localhost:5173,"
                "http://127.0.0.1:3000,http://127.0.0.1:5173",
            ).split(",")
            if o.strip()
        ]
    )

    # Rate limiting
    rate_limit_enabled: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    rate_limit_per_minute: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "60"))

settings = Config()

_logger = logging.getLogger(__name__)
if settings.environment != "development" and settings.database_url.startswith("sqlite:///./"):
    _logger.warning("⚠ Using the local SQLite file database outside development.")
