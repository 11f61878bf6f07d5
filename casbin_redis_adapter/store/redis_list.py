"""
Redis list gateway for the Casbin Redis adapter.
"""

from contextlib import contextmanager
from typing import Callable, List, Optional, Sequence

import redis

from shared.logging import get_logger
from shared.errors import StoreError, StoreConnectionError


class RedisListStore:
    """Ordered list primitives over one Redis client.

    Every method maps to one Redis round-trip. ``remove_first`` relies on
    LREM with a count of 1, which removes the earliest equal entry only.

    ``client_factory`` maps a logical database index to a fresh client.
    When present, ``select`` swaps clients instead of sending SELECT on a
    pooled connection, which redis-py would not carry over to the next
    connection it hands out.
    """

    def __init__(self, client: redis.Redis, client_factory: Optional[Callable[[int], redis.Redis]] = None):
        self.client = client
        self.client_factory = client_factory
        self.logger = get_logger("casbin_redis_adapter.store.redis_list")

    @classmethod
    def connect(
        cls,
        host: str = "localhost",
        port: int = 6379,
        password: Optional[str] = None,
        db: int = 0,
        username: Optional[str] = None,
        ssl: bool = False,
        socket_connect_timeout: Optional[float] = 5,
        socket_timeout: Optional[float] = None,
    ) -> "RedisListStore":
        """Open a client for host/port credentials."""
        def client_factory(db_index: int) -> redis.Redis:
            return redis.Redis(
                host=host,
                port=port,
                username=username,
                password=password,
                db=db_index,
                ssl=ssl,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=socket_connect_timeout,
                socket_timeout=socket_timeout,
                health_check_interval=30
            )

        return cls(client_factory(db), client_factory=client_factory)

    @contextmanager
    def _command(self, command: str, key: Optional[str] = None):
        """Translate client failures into store errors."""
        try:
            yield
        except redis.exceptions.ConnectionError as e:
            # AuthenticationError is a ConnectionError subclass
            self.logger.error("Redis connection failed", command=command, key=key, error=str(e))
            raise StoreConnectionError(str(e), details={"command": command, "key": key}) from e
        except redis.exceptions.RedisError as e:
            self.logger.error("Redis command failed", command=command, key=key, error=str(e))
            raise StoreError(str(e), details={"command": command, "key": key}) from e

    def ping(self) -> bool:
        """Check the server answers."""
        with self._command("PING"):
            return bool(self.client.ping())

    def length(self, key: str) -> int:
        """Number of entries; 0 when the key does not exist."""
        with self._command("LLEN", key):
            return self.client.llen(key) or 0

    def range(self, key: str, start: int, end: int) -> List[str]:
        """Entries from ``start`` to ``end`` inclusive.

        Redis clamps ``end`` to the last index, so ``end == length`` reads
        the whole list without duplicating the tail.
        """
        with self._command("LRANGE", key):
            return self.client.lrange(key, start, end)

    def append(self, key: str, record: str) -> int:
        """Append one record at the tail; returns the new length."""
        with self._command("RPUSH", key):
            return self.client.rpush(key, record)

    def remove_first(self, key: str, record: str) -> int:
        """Remove the earliest entry equal to ``record``; returns 0 or 1."""
        with self._command("LREM", key):
            return self.client.lrem(key, 1, record)

    def delete(self, key: str) -> int:
        """Drop the whole list."""
        with self._command("DEL", key):
            return self.client.delete(key)

    def replace_all(self, key: str, records: Sequence[str]) -> None:
        """Swap the list contents for ``records``.

        DEL and the bulk RPUSH run in one MULTI/EXEC block, so readers see
        either the old list or the new one, never an empty or partial one.
        """
        with self._command("MULTI", key):
            with self.client.pipeline(transaction=True) as pipe:
                pipe.delete(key)
                if records:
                    pipe.rpush(key, *records)
                pipe.execute()

    def select(self, db_index: int) -> None:
        """Switch the logical database."""
        if self.client_factory is None:
            with self._command("SELECT"):
                self.client.select(db_index)
            return

        previous = self.client
        self.client = self.client_factory(db_index)
        previous.close()

    def close(self) -> None:
        """Release the client's connections."""
        self.client.close()
