"""Tests for opsgenie_sdk.metrics package."""

import threading
from typing import Any

import pytest
from prometheus_client import REGISTRY

from opsgenie_sdk.metrics import (
    ApiMetric,
    HttpMetric,
    Metric,
    MetricCategory,
    MetricsBus,
    MetricSubscriber,
    SdkMetric,
)
from opsgenie_sdk.metrics.prometheus import record_metric
from opsgenie_sdk.models import ResultMetadata

_HTTP = HttpMetric(resource_path="/v2/x", status="200 OK", status_code=200, retry_count=0)
_API = ApiMetric(resource_path="/v2/x", result_metadata=ResultMetadata(request_id="r"))
_SDK = SdkMetric(resource_path="/v2/x")


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_register_keeps_insertion_order_and_duplicates() -> None:
    bus = MetricsBus()
    first = MetricSubscriber(process=lambda _m: None, name="first")
    second = MetricSubscriber(process=lambda _m: None, name="second")

    first.register(bus, MetricCategory.HTTP, MetricCategory.SDK, MetricCategory.API)
    bus.register(second, "http")
    bus.register(first, MetricCategory.HTTP)

    assert bus.subscribers(MetricCategory.HTTP) == [first, second, first]
    assert bus.subscribers("sdk") == [first]
    assert bus.subscribers("api") == [first]
    assert first.categories == {MetricCategory.HTTP, MetricCategory.SDK, MetricCategory.API}
    assert second.categories == {MetricCategory.HTTP}


def test_register_unknown_category_rejected() -> None:
    bus = MetricsBus()
    with pytest.raises(ValueError, match="'alerts'"):
        bus.register(MetricSubscriber(process=lambda _m: None), "alerts")


def test_publish_in_registration_order() -> None:
    bus = MetricsBus()
    calls: list[str] = []
    for name in ("a", "b", "c"):
        bus.register(
            MetricSubscriber(process=lambda _m, name=name: calls.append(name)),
            MetricCategory.SDK,
        )

    bus.publish(MetricCategory.SDK, _SDK)

    assert calls == ["a", "b", "c"]


def test_publish_only_reaches_registered_category() -> None:
    bus = MetricsBus()
    received: list[Metric] = []
    bus.register(MetricSubscriber(process=received.append), MetricCategory.API)

    bus.publish(MetricCategory.HTTP, _HTTP)
    bus.publish(MetricCategory.SDK, _SDK)
    bus.publish(MetricCategory.API, _API)

    assert received == [_API]


def test_subscriber_without_categories_receives_nothing() -> None:
    bus = MetricsBus()
    received: list[Metric] = []
    subscriber = MetricSubscriber(process=received.append)
    subscriber.register(bus)

    for category, metric in (("http", _HTTP), ("api", _API), ("sdk", _SDK)):
        bus.publish(category, metric)

    assert received == []
    assert subscriber.categories == set()


def test_return_value_of_subscriber_is_ignored() -> None:
    bus = MetricsBus()
    bus.register(MetricSubscriber(process=lambda metric: metric), MetricCategory.HTTP)
    assert bus.publish(MetricCategory.HTTP, _HTTP) is None


def test_failing_subscriber_is_isolated(captured_logs: list[dict[str, Any]]) -> None:
    """Test a raising subscriber is logged and the next one still runs."""
    bus = MetricsBus()
    received: list[Metric] = []

    def explode(_metric: Metric) -> None:
        raise RuntimeError("boom")

    bus.register(MetricSubscriber(process=explode, name="exploding"), MetricCategory.HTTP)
    bus.register(MetricSubscriber(process=received.append), MetricCategory.HTTP)

    bus.publish(MetricCategory.HTTP, _HTTP)

    assert received == [_HTTP]
    failures = [log for log in captured_logs if log["event"] == "Metric subscriber failed"]
    assert len(failures) == 1
    assert failures[0]["subscriber"] == "exploding"
    assert failures[0]["category"] == "http"
    assert failures[0]["log_level"] == "error"


def test_concurrent_register_and_publish() -> None:
    bus = MetricsBus()
    received: list[Metric] = []
    lock = threading.Lock()

    def process(metric: Metric) -> None:
        with lock:
            received.append(metric)

    def register() -> None:
        for _ in range(200):
            bus.register(MetricSubscriber(process=process), MetricCategory.SDK)

    def publish() -> None:
        for _ in range(200):
            bus.publish(MetricCategory.SDK, _SDK)

    threads = [threading.Thread(target=register), threading.Thread(target=publish)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(bus.subscribers(MetricCategory.SDK)) == 200
    assert all(metric is _SDK for metric in received)


def test_metrics_are_immutable() -> None:
    with pytest.raises(AttributeError):
        _HTTP.retry_count = 3  # type: ignore[misc]


def test_record_http_metric() -> None:
    labels = {"resource_path": "/v2/prom-http", "status_code": "504"}
    before = _sample("opsgenie_sdk_requests_total", labels)
    retries_before = _sample("opsgenie_sdk_retries_total", {"resource_path": "/v2/prom-http"})

    record_metric(
        HttpMetric(
            resource_path="/v2/prom-http",
            status="504 Gateway Timeout",
            status_code=504,
            retry_count=2,
            duration=0.3,
        )
    )

    assert _sample("opsgenie_sdk_requests_total", labels) == before + 1
    assert (
        _sample("opsgenie_sdk_retries_total", {"resource_path": "/v2/prom-http"})
        == retries_before + 2
    )


def test_record_api_metric_rate_limited() -> None:
    labels = {"resource_path": "/v2/prom-api", "state": "THROTTLED"}
    before = _sample("opsgenie_sdk_rate_limited_total", labels)

    record_metric(
        ApiMetric(
            resource_path="/v2/prom-api",
            result_metadata=ResultMetadata(rate_limit_state="THROTTLED"),
        )
    )
    record_metric(ApiMetric(resource_path="/v2/prom-api", result_metadata=ResultMetadata()))

    assert _sample("opsgenie_sdk_rate_limited_total", labels) == before + 1


def test_record_sdk_metric_counts_errors_only() -> None:
    labels = {"error_type": "response-parsing-error"}
    before = _sample("opsgenie_sdk_errors_total", labels)

    record_metric(SdkMetric(resource_path="/v2/x", error_type="response-parsing-error"))
    record_metric(SdkMetric(resource_path="/v2/x"))

    assert _sample("opsgenie_sdk_errors_total", labels) == before + 1
