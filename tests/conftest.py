"""Shared fixtures for the Casbin Redis adapter tests."""

import os

import pytest
from casbin.model import Model
from prometheus_client import CollectorRegistry

from casbin_redis_adapter.adapter import RedisAdapter
from casbin_redis_adapter.store.redis_list import RedisListStore
from shared.metrics import MetricsCollector
from tests.fakes.fake_redis import FakeRedisServer

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")
RBAC_MODEL_PATH = os.path.join(FIXTURES_DIR, "rbac_model.conf")
RBAC_POLICY_PATH = os.path.join(FIXTURES_DIR, "rbac_policy.csv")

KEY = "casbin_rules"


@pytest.fixture
def redis_server():
    """In-memory Redis holding every logical database."""
    return FakeRedisServer()


@pytest.fixture
def store(redis_server):
    """List store on database 0 that can switch databases."""
    return RedisListStore(redis_server.client(0), client_factory=redis_server.client)


@pytest.fixture
def metrics_registry():
    """Isolated Prometheus registry."""
    return CollectorRegistry()


@pytest.fixture
def adapter(store, metrics_registry):
    """Adapter over the fake store."""
    return RedisAdapter(
        key=KEY,
        store=store,
        metrics=MetricsCollector("redis_adapter", registry=metrics_registry)
    )


@pytest.fixture
def model():
    """Empty RBAC model."""
    m = Model()
    m.load_model(RBAC_MODEL_PATH)
    return m
