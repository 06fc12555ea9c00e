"""Configuration module for the Directus adapter."""
from .settings import ProviderConfig, load_settings

__all__ = ["ProviderConfig", "load_settings"]
