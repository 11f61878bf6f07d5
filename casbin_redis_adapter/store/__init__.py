"""
Store package.

Provides the ordered-list gateway the adapter persists policy records
through. Only Redis list commands are used: RPUSH, LRANGE, LLEN, LREM, DEL
and a MULTI/EXEC block for whole-list replacement.
"""

from .redis_list import RedisListStore

__all__ = ["RedisListStore"]
