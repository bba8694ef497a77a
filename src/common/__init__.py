# Common utilities and shared modules
"""
Shared components used across the price discovery engine:
- Data models (Pydantic schemas)
- Logging configuration
- Project configuration
"""

from .config import settings, PROJECT_ROOT, DATA_DIR
from .logging import setup_logging
from .models import VariantOption, VehiclePartQuery

__all__ = [
    "settings",
    "PROJECT_ROOT",
    "DATA_DIR",
    "setup_logging",
    "VariantOption",
    "VehiclePartQuery",
]
