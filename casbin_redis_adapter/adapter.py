"""
Redis adapter for Casbin policy storage.
"""

from typing import List, Optional, Sequence

import redis
from casbin import persist

from shared.logging import get_logger
from shared.metrics import MetricsCollector
from shared.errors import StoreConnectionError, ValidationError
from .config import AdapterSettings, DEFAULT_KEY
from .rules.models import StoredRule, MAX_FIELDS, encode, decode
from .store.redis_list import RedisListStore

# Policy sections persisted by save_policy, in write order.
POLICY_SECTIONS = ("p", "g")


class RedisAdapter(persist.BatchAdapter, persist.Adapter):
    """Persists Casbin policy rules in a single Redis list.

    Each list entry is one ``StoredRule`` in its JSON wire form. The
    ``sec`` argument of the mutation methods is accepted for engine
    compatibility only; the stored tag is always ``ptype``.

    ``save_policy`` is delete-then-append and is not atomic: a concurrent
    reader can observe the list empty or partially written, and a crash
    mid-save leaves a partial list.

    Metrics go to the collector passed as ``metrics``. The default
    collector is not bound to any registry, so nothing is exported unless
    the caller supplies one built with a ``CollectorRegistry`` it scrapes.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        key: str = DEFAULT_KEY,
        password: Optional[str] = None,
        db: int = 0,
        client: Optional[redis.Redis] = None,
        store: Optional[RedisListStore] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.key = key
        self.logger = get_logger("casbin_redis_adapter.adapter").bind(key=key)
        self.metrics = metrics or MetricsCollector("redis_adapter")

        if store is not None:
            self.store = store
        elif client is not None:
            self.store = RedisListStore(client)
        else:
            self.store = RedisListStore.connect(host=host, port=port, password=password, db=db)

        # Host details are only known when the connection was built here
        connection = {} if (store is not None or client is not None) else {"host": host, "port": port, "db": db}

        if not self.store.ping():
            raise StoreConnectionError("Redis did not answer PING", details=connection)
        self.logger.info("Redis service is running", **connection)

    @classmethod
    def from_settings(cls, settings: AdapterSettings, metrics: Optional[MetricsCollector] = None) -> "RedisAdapter":
        """Create an adapter from settings."""
        store = RedisListStore.connect(
            host=settings.host,
            port=settings.port,
            password=settings.password,
            db=settings.db,
            username=settings.username,
            ssl=settings.ssl,
            socket_connect_timeout=settings.socket_connect_timeout,
            socket_timeout=settings.socket_timeout,
        )
        return cls(
            key=settings.key,
            store=store,
            metrics=metrics,
        )

    def load_policy(self, model):
        """Load all policy rules from the storage."""
        with self.metrics.time_operation("load_policy"):
            length = self.store.length(self.key)
            if not length:
                self.logger.debug("No stored policy to load")
                self.metrics.set_stored_rules(0)
                return

            records = self.store.range(self.key, 0, length)
            # Decode everything before touching the model so a bad record
            # aborts the load without a partial import.
            lines = [decode(StoredRule.loads(record)) for record in records]
            for line in lines:
                persist.load_policy_line(line, model)

            self.metrics.set_stored_rules(len(lines))
            self.logger.debug("Policy loaded", rules=len(lines))

    def save_policy(self, model):
        """Save all policy rules to the storage, replacing what is there."""
        with self.metrics.time_operation("save_policy"):
            self.store.delete(self.key)

            count = 0
            for sec in POLICY_SECTIONS:
                if sec not in model.model:
                    continue
                for ptype, assertion in model.model[sec].items():
                    for rule in assertion.policy:
                        self.store.append(self.key, encode(ptype, rule).dumps())
                        count += 1

            self.metrics.set_stored_rules(count)
            self.logger.debug("Policy saved", rules=count)
            return True

    def add_policy(self, sec, ptype, rule):
        """Add a policy rule to the storage."""
        if not rule:
            return False

        with self.metrics.time_operation("add_policy"):
            self.store.append(self.key, encode(ptype, rule).dumps())
            self.logger.debug("Policy added", ptype=ptype, rule=list(rule))
            return True

    def remove_policy(self, sec, ptype, rule):
        """Remove a policy rule from the storage.

        At most one stored copy is removed, matched on the exact record
        text.
        """
        if not rule:
            return False

        with self.metrics.time_operation("remove_policy"):
            removed = self.store.remove_first(self.key, encode(ptype, rule).dumps())
            self.logger.debug("Policy removed", ptype=ptype, rule=list(rule), removed=removed)
            return True

    def add_policies(self, sec, ptype, rules):
        """Add policy rules to the storage, one RPUSH per rule."""
        for rule in rules:
            self.add_policy(sec, ptype, rule)
        return True

    def remove_policies(self, sec, ptype, rules):
        """Remove policy rules from the storage, one LREM per rule."""
        for rule in rules:
            self.remove_policy(sec, ptype, rule)
        return True

    def remove_filtered_policy(self, sec, ptype, field_index, *field_values):
        """Remove policy rules that match the filter from the storage.

        A stored rule matches when its ptype equals ``ptype`` and slot
        ``field_index + i`` equals ``field_values[i]`` for every i (an empty
        filter value matches anything). Survivors keep their relative order.
        """
        if not field_values:
            return False
        self._check_filter_range(field_index, field_values)

        with self.metrics.time_operation("remove_filtered_policy"):
            records = self.store.range(self.key, 0, -1)

            kept: List[str] = []
            for record in records:
                if not StoredRule.loads(record).matches_filter(ptype, field_index, field_values):
                    kept.append(record)

            self.store.replace_all(self.key, kept)

            self.metrics.set_stored_rules(len(kept))
            self.logger.debug(
                "Filtered policy removed",
                ptype=ptype,
                field_index=field_index,
                field_values=list(field_values),
                removed=len(records) - len(kept)
            )
            return True

    def select_db(self, db_index: int):
        """Switch the logical Redis database the policy list lives in."""
        self.store.select(db_index)
        self.logger.info("Redis database selected", db=db_index)

    def close(self):
        """Close the redis connection."""
        self.store.close()
        self.logger.info("Redis adapter closed")

    def _check_filter_range(self, field_index: int, field_values: Sequence[str]):
        last_index = field_index + len(field_values) - 1
        if field_index < 0 or last_index >= MAX_FIELDS:
            raise ValidationError(
                f"Filter must address fields v0..v{MAX_FIELDS - 1}",
                details={"field_index": field_index, "field_count": len(field_values)}
            )
