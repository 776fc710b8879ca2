from chathub.core.cache.connector_cache import CacheKeys, CacheTTL, ConnectorCache
from chathub.core.cache.preloader import PreloadTarget, cache_status, preload_all, preload_connector

__all__ = [
    "CacheKeys",
    "CacheTTL",
    "ConnectorCache",
    "PreloadTarget",
    "cache_status",
    "preload_all",
    "preload_connector",
]
