"""
Shared metrics configuration for the Casbin Redis adapter.
"""

from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry
from typing import Dict, Any, Optional
import time
from contextlib import contextmanager


class MetricsCollector:
    """Centralized metrics collector for adapter components.

    Metrics are registered on ``registry`` when one is given. With the
    default ``None`` they are created unregistered, so several adapters can
    live in one process without name clashes.
    """

    def __init__(self, component: str, registry: Optional[CollectorRegistry] = None):
        self.component = component
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up policy storage metrics."""
        self._metrics["policy_operations_total"] = Counter(
            "policy_operations_total",
            "Total policy storage operations",
            ["component", "operation", "status"],
            registry=self.registry
        )

        self._metrics["policy_operation_duration_seconds"] = Histogram(
            "policy_operation_duration_seconds",
            "Policy storage operation duration in seconds",
            ["component", "operation"],
            registry=self.registry
        )

        self._metrics["stored_policy_rules"] = Gauge(
            "stored_policy_rules",
            "Policy rules held in the backing list after the last full read or write",
            ["component"],
            registry=self.registry
        )

    def record_operation(self, operation: str, status: str, duration: float):
        """Record one completed operation."""
        self._metrics["policy_operations_total"].labels(
            component=self.component,
            operation=operation,
            status=status
        ).inc()

        self._metrics["policy_operation_duration_seconds"].labels(
            component=self.component,
            operation=operation
        ).observe(duration)

    def set_stored_rules(self, count: int):
        """Record how many rules the backing list holds."""
        self._metrics["stored_policy_rules"].labels(component=self.component).set(count)

    @contextmanager
    def time_operation(self, operation: str):
        """Context manager to time an operation and count its outcome."""
        start_time = time.time()
        status = "success"
        try:
            yield
        except Exception:
            status = "error"
            raise
        finally:
            self.record_operation(operation, status, time.time() - start_time)

