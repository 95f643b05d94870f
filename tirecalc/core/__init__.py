"""
Configuration and logging for tirecalc.
"""

from tirecalc.core.config import Settings, get_settings
from tirecalc.core.logging import setup_logging

__all__ = ["Settings", "get_settings", "setup_logging"]
