"""SDK metrics: snapshots, publish/subscribe bus and Prometheus export.

Each ``execute`` call publishes up to three snapshots, in this order:
- HttpMetric (category "http"): final attempt of the HTTP exchange
- ApiMetric (category "api"): result metadata, only if a response arrived
- SdkMetric (category "sdk"): outcome of the call, always

Example:
    >>> from opsgenie_sdk.metrics import MetricCategory, MetricSubscriber
    >>> subscriber = MetricSubscriber(process=lambda metric: print(metric))
    >>> client.metrics.register(subscriber, MetricCategory.API)
"""

from opsgenie_sdk.metrics.bus import MetricsBus, MetricSubscriber
from opsgenie_sdk.metrics.models import (
    ApiMetric,
    HttpMetric,
    Metric,
    MetricCategory,
    SdkMetric,
)

__all__ = [
    "ApiMetric",
    "HttpMetric",
    "Metric",
    "MetricCategory",
    "MetricSubscriber",
    "MetricsBus",
    "SdkMetric",
]
