# ==============================================================================
# FILE: techboard/config.py
# ==============================================================================
# Configuration settings for the technical analysis service

import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        logger.warning(f"Invalid value for {name}, using {default}")
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        logger.warning(f"Invalid value for {name}, using {default}")
        return default


class Settings:
    """Application settings"""

    def __init__(self):
        # Completion endpoint
        self.perplexity_api_key: str = os.getenv("PERPLEXITY_API_KEY", "").strip()
        self.perplexity_api_url: str = os.getenv(
            "PERPLEXITY_API_URL", "https://api.perplexity.ai/chat/completions"
        )
        self.perplexity_model: str = os.getenv("PERPLEXITY_MODEL", "llama-3.1-sonar-small-128k-online")

        # Request shaping
        self.temperature: float = _env_float("LLM_TEMPERATURE", 0.1)
        self.max_tokens: int = _env_int("LLM_MAX_TOKENS", 1000)
        self.search_recency_filter: str = os.getenv("SEARCH_RECENCY_FILTER", "month")
        self.request_timeout: float = _env_float("REQUEST_TIMEOUT", 30.0)

        # Panels kept in memory, least recently used are evicted first
        self.max_panels: int = max(1, _env_int("MAX_PANELS", 256))

        # Application Settings
        self.app_name: str = "TechBoard Technical Analysis API"
        self.debug: bool = os.getenv("DEBUG", "False").lower() == "true"
        self.log_level: str = os.getenv("LOG_LEVEL", "DEBUG" if self.debug else "INFO").upper()

        # CORS Settings
        origins = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:8000")
        self.allowed_origins = [o.strip() for o in origins.split(",") if o.strip()]

        if not self.perplexity_api_key:
            logger.warning("Missing API key: PERPLEXITY_API_KEY")


def get_api_key() -> Optional[str]:
    """Returns the completion API key, or None when it is not configured."""
    return settings.perplexity_api_key or None


# Create global settings instance
settings = Settings()
