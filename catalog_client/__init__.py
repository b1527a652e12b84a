"""Thin client for the library catalog API."""

from catalog_client.api_client import CatalogAPIClient
from catalog_client.store import LibraryStore

__all__ = ["CatalogAPIClient", "LibraryStore"]
