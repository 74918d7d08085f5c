"""Exceptions raised by the Opsgenie SDK.

Every failure of ``OpsGenieClient.execute`` is raised as a subclass of
``OpsGenieError``. The ``error_type`` class attribute is the value reported
in ``SdkMetric.error_type`` for that failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from opsgenie_sdk.models import ResultMetadata


class OpsGenieError(Exception):
    """Base exception for all SDK errors."""

    error_type = "sdk-error"


class ConfigurationError(OpsGenieError):
    """Client configuration is invalid (e.g. blank API key)."""

    error_type = "configuration-error"


class RequestValidationError(OpsGenieError, ValueError):
    """Request failed its own validation. No HTTP call was made."""

    error_type = "request-validation-error"


class RequestBuildError(OpsGenieError):
    """Request could not be turned into an HTTP request."""

    error_type = "request-build-error"


class TransportError(OpsGenieError):
    """Connection or timeout failure after all retries were used."""

    error_type = "http-error"


class RequestCancelledError(TransportError):
    """Call was cancelled or its deadline expired."""


class DecodeError(OpsGenieError):
    """Successful response body could not be parsed into the result."""

    error_type = "response-parsing-error"

    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(f"Response could not be parsed: {cause}")


class ApiError(OpsGenieError):
    """Opsgenie answered with a non-2xx status code.

    Attributes:
        status_code: HTTP status code of the final attempt
        message: ``message`` member of the response body (or the reason phrase)
        request_id: ``requestId`` member of the response body, if any
        took: ``took`` member of the response body, if any
        errors: field-level error details (422 responses)
        metadata: result metadata captured from the final response
    """

    error_type = "api-error"

    def __init__(
        self,
        status_code: int,
        message: str,
        request_id: str = "",
        took: float | None = None,
        errors: dict[str, Any] | None = None,
        metadata: ResultMetadata | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.request_id = request_id
        self.took = took
        self.errors = errors or {}
        self.metadata = metadata
        super().__init__(self._describe())

    def _describe(self) -> str:
        text = f"Error occurred with status code: {self.status_code}, message: {self.message}"
        if self.took is not None:
            text += f", took: {self.took}"
        if self.request_id:
            text += f", request id: {self.request_id}"
        if self.errors:
            details = ", ".join(f"{field}: {detail}" for field, detail in self.errors.items())
            text += f", errors: {details}"
        return text


class ClientError(ApiError):
    """4xx response other than 429. Never retried."""


class UnprocessableEntityError(ClientError):
    """422 response; ``errors`` holds the field-level details."""


class ServerError(ApiError):
    """5xx response after all retries were used."""


class RateLimitError(ApiError):
    """429 response after all retries were used."""
