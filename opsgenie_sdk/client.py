"""Opsgenie API client.

Owns the httpx connection pool, the metrics bus and the request executor.
Resource clients (e.g. ``HeartbeatApi``) are thin wrappers around
``OpsGenieClient.execute``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from opsgenie_sdk import __version__
from opsgenie_sdk.config import ClientSettings
from opsgenie_sdk.exceptions import ConfigurationError
from opsgenie_sdk.executor import RequestExecutor
from opsgenie_sdk.metrics.bus import MetricsBus

if TYPE_CHECKING:
    from opsgenie_sdk.context import CallContext
    from opsgenie_sdk.models import Request, Result

logger = structlog.get_logger(__name__)

USER_AGENT = f"opsgenie-sdk-python/{__version__}"


class OpsGenieClient:
    """Opsgenie API client.

    Example:
        >>> client = OpsGenieClient(ClientSettings(api_key="..."))
        >>> result = client.execute(PingRequest(heartbeat_name="web"), PingResult())
        >>> print(result.message, result.metadata.request_id)
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        bus: MetricsBus | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: client settings; read from OPSGENIE_* environment variables if omitted
            bus: metrics bus to publish to; a new one is created if omitted
            transport: optional httpx transport (proxies, custom TLS, tests)

        Raises:
            ConfigurationError: the API key is blank
        """
        self.settings = settings or ClientSettings()
        api_key = self.settings.api_key.get_secret_value()
        if not api_key.strip():
            raise ConfigurationError("API key cannot be blank")

        self.metrics = bus or MetricsBus()
        self._client = httpx.Client(
            base_url=self.settings.api_url,
            headers={
                "Authorization": f"GenieKey {api_key}",
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            },
            timeout=self.settings.timeout,
            transport=transport,
        )
        self._executor = RequestExecutor(
            self._client,
            self.metrics,
            retry_count=self.settings.retry_count,
            timeout=self.settings.timeout,
        )
        logger.debug(
            "Opsgenie client created",
            api_url=self.settings.api_url,
            retry_count=self.settings.retry_count,
        )

    def execute[R: Result](
        self, request: Request, result: R, context: CallContext | None = None
    ) -> R:
        """Execute ``request`` and decode the response into ``result``.

        See ``RequestExecutor.execute``.
        """
        return self._executor.execute(request, result, context)

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    def __enter__(self) -> OpsGenieClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
