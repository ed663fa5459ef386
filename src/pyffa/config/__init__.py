"""Configuration helpers for runtime settings and CSV column profiles."""

from .profile import ColumnProfile
from .settings import Settings, load_settings

__all__ = [
    "ColumnProfile",
    "Settings",
    "load_settings",
]
