"""
Redis storage adapter for Casbin.

This package persists the policy rules of a Casbin enforcer in one Redis
list. It provides:

- adapter: RedisAdapter, the engine-facing load/save/add/remove surface.
- rules: StoredRule, the fixed-shape record and its codec.
- store: RedisListStore, the thin gateway over Redis list commands.
- config: AdapterSettings via pydantic-settings.

Guidelines:
- The adapter holds no policy state; the Redis list is the only copy.
- Whole-list rewrites (save, filtered removal) are not safe against
  concurrent writers from other adapter instances.
"""

from .adapter import RedisAdapter
from .config import AdapterSettings, get_settings
from .rules.models import StoredRule

__version__ = "1.0.0"

__all__ = ["RedisAdapter", "AdapterSettings", "get_settings", "StoredRule"]
