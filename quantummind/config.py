"""
QuantumMind Configuration

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
    VERSION: str = "0.3.0"

    # --- LLM Provider (optional AI signal) ---
    LLM_PROVIDER: str = os.getenv("QUANTUMMIND_LLM_PROVIDER", "gemini")
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # --- Result Cache ---
    CACHE_TTL_SECONDS: int = int(os.getenv("QUANTUMMIND_CACHE_TTL", "3600"))
    CACHE_MAX_ENTRIES: int = int(os.getenv("QUANTUMMIND_CACHE_MAX_ENTRIES", "500"))

    # --- Server ---
    HOST: str = os.getenv("QUANTUMMIND_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("QUANTUMMIND_PORT", "8000"))

    # --- Requests ---
    MAX_BODY_BYTES: int = int(os.getenv("QUANTUMMIND_MAX_BODY_BYTES", "1048576"))

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("QUANTUMMIND_CORS_ORIGINS", "*")

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
