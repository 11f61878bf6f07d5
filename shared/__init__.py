"""
Shared utilities for the Casbin Redis adapter.

This package aggregates the common building blocks the adapter relies on:

- config: Base configuration via pydantic-settings
- logging: Structured logging with structlog
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Do not import from casbin_redis_adapter into shared/.
"""
