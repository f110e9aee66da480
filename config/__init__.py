"""
Configuration Management Module
"""
from .settings import (
    Settings,
    DogApiSettings,
    RetrievalSettings,
    get_settings,
)

__all__ = [
    "Settings",
    "DogApiSettings",
    "RetrievalSettings",
    "get_settings",
]
