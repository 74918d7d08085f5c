"""Global test configuration for opsgenie_sdk tests."""

from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest
from structlog.testing import capture_logs

from opsgenie_sdk import ClientSettings, MetricsBus, OpsGenieClient
from opsgenie_sdk.metrics import Metric, MetricCategory, MetricSubscriber

API_URL = "https://api.opsgenie.test"

type Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it receives."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture(autouse=True)
def clean_opsgenie_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ignore OPSGENIE_* variables of the environment running the tests."""
    for name in ("API_KEY", "API_URL", "RETRY_COUNT", "TIMEOUT"):
        monkeypatch.delenv(f"OPSGENIE_{name}", raising=False)


@pytest.fixture
def bus() -> MetricsBus:
    return MetricsBus()


@pytest.fixture
def make_client(
    bus: MetricsBus,
) -> Generator[Callable[..., tuple[OpsGenieClient, RecordingTransport]], None, None]:
    """Factory for clients talking to a recording mock transport."""
    clients: list[OpsGenieClient] = []

    def factory(
        handler: Handler, **settings: Any
    ) -> tuple[OpsGenieClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = OpsGenieClient(
            ClientSettings(
                api_key=settings.pop("api_key", "test-api-key"),
                api_url=API_URL,
                **settings,
            ),
            bus=bus,
            transport=transport,
        )
        clients.append(client)
        return client, transport

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def collected(bus: MetricsBus) -> dict[MetricCategory, list[Metric]]:
    """Metrics published on the bus, by category."""
    metrics: dict[MetricCategory, list[Metric]] = {c: [] for c in MetricCategory}
    for category in MetricCategory:
        bus.register(
            MetricSubscriber(process=metrics[category].append, name=f"collect-{category}"),
            category,
        )
    return metrics


@pytest.fixture
def captured_logs() -> Generator[list[dict[str, Any]], None, None]:
    with capture_logs() as logs:
        yield logs
