from .cache_manager import CacheEntry, ContextCache

__all__ = ['CacheEntry', 'ContextCache']
