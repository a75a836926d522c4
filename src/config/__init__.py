"""Configuration module for the WOTC engine."""

from .catalog_loader import CatalogLoadError, CatalogLoader, CatalogMetadata, load_catalog
from .settings import EngineSettings, get_settings

__all__ = [
    "CatalogLoadError",
    "CatalogLoader",
    "CatalogMetadata",
    "load_catalog",
    "EngineSettings",
    "get_settings",
]
