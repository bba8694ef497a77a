"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_DIR = PROJECT_ROOT / "data"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class CarPartSettings(BaseModel):
    """Settings for the car-part.com catalog scraper."""
    search_url: str = "https://www.car-part.com/cgi-bin/search.cgi"
    request_timeout: float = 15.0
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36"
    )
    rotate_user_agent: bool = False
    default_postal_code: str = "60018"
    location_scope: str = "USA"
    db_model: str = "9.36.1.1"
    page_delay_seconds: float = Field(default=1.0, ge=0)
    item_delay_seconds: float = Field(default=1.0, ge=0)


class Settings(BaseModel):
    """Top-level application settings."""
    car_part: CarPartSettings = Field(default_factory=CarPartSettings)
    raw_html_cache_dir: str | None = None

    @classmethod
    def load(cls, path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults."""
        settings_path = path or CONFIG_DIR / "settings.yaml"
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()


# Singleton settings instance
settings = Settings.load()
