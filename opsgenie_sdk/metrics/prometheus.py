"""Prometheus export of SDK metrics.

Every metric the executor publishes is recorded here first, independent of
the subscribers registered on the bus.
"""

from prometheus_client import Counter, Histogram

from opsgenie_sdk.metrics.models import ApiMetric, HttpMetric, Metric, SdkMetric

DEFAULT_BUCKETS_EXTERNAL_API = (0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)

opsgenie_request = Counter(
    "opsgenie_sdk_requests_total",
    "Total number of Opsgenie API calls by final status code",
    ["resource_path", "status_code"],
)

opsgenie_request_duration = Histogram(
    "opsgenie_sdk_request_duration_seconds",
    "Duration of the final Opsgenie API attempt in seconds",
    ["resource_path"],
    buckets=DEFAULT_BUCKETS_EXTERNAL_API,
)

opsgenie_retry = Counter(
    "opsgenie_sdk_retries_total",
    "Total number of retried Opsgenie API attempts",
    ["resource_path"],
)

opsgenie_rate_limited = Counter(
    "opsgenie_sdk_rate_limited_total",
    "Total number of Opsgenie API responses announcing a rate-limit state",
    ["resource_path", "state"],
)

opsgenie_error = Counter(
    "opsgenie_sdk_errors_total",
    "Total number of failed SDK calls by error type",
    ["error_type"],
)


def record_metric(metric: Metric) -> None:
    match metric:
        case HttpMetric():
            opsgenie_request.labels(metric.resource_path, str(metric.status_code)).inc()
            opsgenie_request_duration.labels(metric.resource_path).observe(
                metric.duration
            )
            if metric.retry_count:
                opsgenie_retry.labels(metric.resource_path).inc(metric.retry_count)
        case ApiMetric():
            state = metric.result_metadata.rate_limit_state
            if state:
                opsgenie_rate_limited.labels(metric.resource_path, state).inc()
        case SdkMetric():
            if metric.error_type:
                opsgenie_error.labels(metric.error_type).inc()
