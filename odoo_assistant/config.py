# odoo_assistant/config.py
import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Process configuration read from the environment (or a .env file)."""

    def __init__(self):
        self.google_api_key: Optional[str] = os.getenv("GOOGLE_API_KEY") or None
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "3000"))
        self.gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
        self.cors_origins: List[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]
        # 0 disables the limit
        self.max_history_turns: int = int(os.getenv("MAX_HISTORY_TURNS", "100"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
