"""Synchronous publish/subscribe bus for SDK metrics."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from opsgenie_sdk.metrics.models import Metric, MetricCategory

logger = structlog.get_logger(__name__)


@dataclass(eq=False)
class MetricSubscriber:
    """A metric processing function and the categories it is registered for.

    The return value of ``process`` is ignored by the bus.

    Example:
        >>> subscriber = MetricSubscriber(process=print)
        >>> subscriber.register(client.metrics, MetricCategory.HTTP, MetricCategory.SDK)
    """

    process: Callable[[Metric], Any]
    name: str = ""
    categories: set[MetricCategory] = field(default_factory=set)

    def register(self, bus: MetricsBus, *categories: MetricCategory | str) -> None:
        for category in categories:
            bus.register(self, category)


class MetricsBus:
    """Category -> ordered subscriber list, fanned out synchronously.

    Subscribers are kept in registration order, may be registered more than
    once and are never removed. A subscriber that raises is logged and
    skipped so the publisher never sees its failure.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: dict[MetricCategory, list[MetricSubscriber]] = {
            category: [] for category in MetricCategory
        }

    def register(
        self, subscriber: MetricSubscriber, category: MetricCategory | str
    ) -> None:
        category = MetricCategory(category)
        with self._lock:
            self._subscribers[category].append(subscriber)
            subscriber.categories.add(category)

    def subscribers(self, category: MetricCategory | str) -> list[MetricSubscriber]:
        with self._lock:
            return list(self._subscribers[MetricCategory(category)])

    def publish(self, category: MetricCategory | str, metric: Metric) -> None:
        category = MetricCategory(category)
        for subscriber in self.subscribers(category):
            try:
                subscriber.process(metric)
            except Exception:
                logger.exception(
                    "Metric subscriber failed",
                    category=str(category),
                    subscriber=subscriber.name or repr(subscriber.process),
                )
