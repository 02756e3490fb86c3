"""
Decision Suite Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Versioning ---
    APP_VERSION: str = "1.0.0"

    # --- Environment ---
    ENV: str = os.getenv("DECISIONSUITE_ENV", "development").lower()

    # --- Persistence ---
    PERSISTENCE: str = os.getenv("DECISIONSUITE_PERSISTENCE", "sqlite").lower()
    DB_PATH: str = os.getenv("DECISIONSUITE_DB_PATH", "decisionsuite.db")

    # --- Origin check ---
    APP_URL: str = os.getenv("DECISIONSUITE_APP_URL", "")

    # --- Rate limiting (fixed window) ---
    RATE_LIMIT_ENABLED: bool = os.getenv("DECISIONSUITE_RATE_LIMIT", "true").lower() == "true"
    RATE_LIMIT_REQUESTS: int = int(os.getenv("DECISIONSUITE_RATE_LIMIT_REQUESTS", "30"))
    RATE_LIMIT_WINDOW: int = int(os.getenv("DECISIONSUITE_RATE_LIMIT_WINDOW", "900"))

    # --- Server ---
    HOST: str = os.getenv("DECISIONSUITE_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("DECISIONSUITE_PORT", "8000"))

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("DECISIONSUITE_CORS_ORIGINS", "*")

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


settings = Settings()
