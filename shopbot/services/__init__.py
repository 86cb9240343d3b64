"""Service layer: catalog, cache, chat sessions and scheduled refresh."""

from .catalog_cache import CacheReadResult, CacheStatus, CatalogCache
from .catalog_service import CatalogService, create_catalog_service, filter_products
from .refresh_job import CatalogRefreshJob
from .session_store import ChatSession, SessionStore

__all__ = [
    "CatalogCache",
    "CacheReadResult",
    "CacheStatus",
    "CatalogService",
    "filter_products",
    "create_catalog_service",
    "CatalogRefreshJob",
    "ChatSession",
    "SessionStore",
]
