"""Cache Module - process-scoped caching."""
from core.cache.expiring_cache import ExpiringCache

__all__ = ['ExpiringCache']
