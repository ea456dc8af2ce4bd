"""Podcast catalog content-management service."""

from __future__ import annotations

from .bootstrap import Catalog, build_catalog
from .config import CatalogSettings

__all__ = ("Catalog", "CatalogSettings", "build_catalog")
