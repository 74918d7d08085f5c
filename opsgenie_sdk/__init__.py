"""Opsgenie API client.

- OpsGenieClient: executes typed requests, handles authentication, retries
  and rate-limit metadata, and publishes usage metrics
- Request / BaseRequest / Result: contracts for resource request and result types
- MetricsBus: synchronous publish/subscribe for http, api and sdk metrics

Example:
    >>> from opsgenie_sdk import ClientSettings, OpsGenieClient
    >>> client = OpsGenieClient(ClientSettings(api_key="...", retry_count=2))
    >>> result = client.execute(request, SomeResult())
    >>> result.metadata.request_id
"""

__version__ = "0.1.0"

from opsgenie_sdk.client import OpsGenieClient  # noqa: E402
from opsgenie_sdk.config import ApiUrl, ClientSettings  # noqa: E402
from opsgenie_sdk.context import CallContext  # noqa: E402
from opsgenie_sdk.exceptions import (  # noqa: E402
    ApiError,
    ClientError,
    ConfigurationError,
    DecodeError,
    OpsGenieError,
    RateLimitError,
    RequestBuildError,
    RequestCancelledError,
    RequestValidationError,
    ServerError,
    TransportError,
    UnprocessableEntityError,
)
from opsgenie_sdk.metrics import (  # noqa: E402
    ApiMetric,
    HttpMetric,
    MetricCategory,
    MetricsBus,
    MetricSubscriber,
    SdkMetric,
)
from opsgenie_sdk.models import BaseRequest, Request, Result, ResultMetadata  # noqa: E402

__all__ = [
    "ApiError",
    "ApiMetric",
    "ApiUrl",
    "BaseRequest",
    "CallContext",
    "ClientError",
    "ClientSettings",
    "ConfigurationError",
    "DecodeError",
    "HttpMetric",
    "MetricCategory",
    "MetricSubscriber",
    "MetricsBus",
    "OpsGenieClient",
    "OpsGenieError",
    "RateLimitError",
    "Request",
    "RequestBuildError",
    "RequestCancelledError",
    "RequestValidationError",
    "Result",
    "ResultMetadata",
    "SdkMetric",
    "ServerError",
    "TransportError",
    "UnprocessableEntityError",
]
