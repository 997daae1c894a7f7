# Common utilities and shared modules
"""
Shared components used by the content and publisher packages:
- Project configuration
- Logging configuration
- Shared enums
"""

from .config import settings, Settings, PROJECT_ROOT, CONTENT_DIR, PUBLIC_DIR
from .logging import setup_logging
from .models import ListingOrder

__all__ = [
    "settings",
    "Settings",
    "PROJECT_ROOT",
    "CONTENT_DIR",
    "PUBLIC_DIR",
    "setup_logging",
    "ListingOrder",
]
