"""Request execution pipeline.

validate -> build HTTP request -> send (bounded, immediate retries) ->
classify status -> decode body -> publish metrics (http, api, sdk).
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx
import structlog

from opsgenie_sdk.context import CallContext
from opsgenie_sdk.decoder import decode, parse_error_envelope
from opsgenie_sdk.exceptions import (
    ApiError,
    ClientError,
    OpsGenieError,
    RateLimitError,
    RequestBuildError,
    RequestCancelledError,
    RequestValidationError,
    ServerError,
    TransportError,
    UnprocessableEntityError,
)
from opsgenie_sdk.metrics.models import (
    ApiMetric,
    HttpMetric,
    Metric,
    MetricCategory,
    SdkMetric,
)
from opsgenie_sdk.metrics.prometheus import record_metric
from opsgenie_sdk.models import BODY_METHODS
from opsgenie_sdk.retry import (
    RateLimitInfo,
    ResponseClass,
    RetryDecision,
    classify_status,
    should_retry,
)

if TYPE_CHECKING:
    from opsgenie_sdk.metrics.bus import MetricsBus
    from opsgenie_sdk.models import Request, ResponseEnvelope, Result

logger = structlog.get_logger(__name__)

_ERRORS_BY_CLASS: dict[ResponseClass, type[ApiError]] = {
    ResponseClass.UNPROCESSABLE: UnprocessableEntityError,
    ResponseClass.CLIENT_ERROR: ClientError,
    ResponseClass.RATE_LIMITED: RateLimitError,
    ResponseClass.SERVER_ERROR: ServerError,
}


@dataclass
class RetryState:
    """Call-local state of the attempt loop. Never shared between calls."""

    resource_path: str = ""
    retry_count: int = 0
    response: httpx.Response | None = None
    body: bytes = b""
    metadata_recorded: bool = False
    http_metric: HttpMetric | None = None


class RequestExecutor:
    """Runs typed requests against the Opsgenie API.

    The executor is safe to share between threads: all per-call state lives
    in a ``RetryState`` owned by the call.
    """

    def __init__(
        self,
        client: httpx.Client,
        bus: MetricsBus,
        retry_count: int,
        timeout: float,
    ) -> None:
        """Initialize the executor.

        Args:
            client: httpx client with base URL and authentication headers set
            bus: bus receiving the metrics of every call
            retry_count: additional attempts for retryable failures
            timeout: HTTP timeout per attempt in seconds
        """
        self._client = client
        self._bus = bus
        self.retry_count = retry_count
        self.timeout = timeout

    def execute[R: Result](
        self, request: Request, result: R, context: CallContext | None = None
    ) -> R:
        """Execute ``request`` and decode the response into ``result``.

        ``result.metadata`` is filled in after every HTTP exchange, also when
        an exception is raised, so rate-limit headers stay visible.

        Args:
            request: request to execute
            result: result instance, updated in place
            context: optional cancellation signal and deadline

        Returns:
            The given ``result``

        Raises:
            RequestValidationError: request failed its own validation
            RequestBuildError: request could not be serialized
            TransportError: connection failure after all retries
            RequestCancelledError: context cancelled or deadline exceeded
            ApiError: non-2xx response (after all retries for 429 and 5xx)
            DecodeError: success response body could not be parsed
        """
        context = context or CallContext()
        state = RetryState()
        error: Exception | None = None
        try:
            state.resource_path = self._resource_path(request)
            self._validate(request)
            http_request = self._build_request(request, state.resource_path)
            self._send(http_request, state, context)
            self._handle_response(state, result)
        except Exception as exc:
            error = exc
            raise
        finally:
            if state.response is not None and not state.metadata_recorded:
                self._record_metadata(state.response, state, result)
            self._publish_metrics(request, result, state, error)
        return result

    @staticmethod
    def _resource_path(request: Request) -> str:
        try:
            return request.resource_path()
        except Exception as exc:
            raise RequestBuildError(
                f"Resource path could not be resolved: {exc!r}"
            ) from exc

    @staticmethod
    def _validate(request: Request) -> None:
        try:
            request.validate()
        except RequestValidationError:
            raise
        except ValueError as exc:
            raise RequestValidationError(str(exc)) from exc

    def _build_request(self, request: Request, resource_path: str) -> httpx.Request:
        method = request.method().upper()
        body = request.request_body() if method in BODY_METHODS else None
        try:
            return self._client.build_request(
                method,
                resource_path,
                params=request.request_params() or None,
                json=body,
            )
        except (TypeError, ValueError, httpx.InvalidURL) as exc:
            raise RequestBuildError(f"Request could not be built: {exc}") from exc

    def _send(
        self, http_request: httpx.Request, state: RetryState, context: CallContext
    ) -> None:
        for attempt_num in range(1, self.retry_count + 2):
            if not self._attempt(http_request, state, context, attempt_num):
                return

    def _attempt(
        self,
        http_request: httpx.Request,
        state: RetryState,
        context: CallContext,
        attempt_num: int,
    ) -> bool:
        """Run one HTTP attempt. Returns True when another attempt should follow."""
        context.raise_if_done()
        state.retry_count = attempt_num - 1
        state.response = None
        state.body = b""

        timeout = self.timeout
        remaining = context.remaining()
        if remaining is not None:
            timeout = min(timeout, remaining)
        http_request.extensions["timeout"] = httpx.Timeout(timeout).as_dict()

        logger.debug(
            "API request",
            method=http_request.method,
            resource_path=state.resource_path,
            attempt=attempt_num,
        )
        started = time.perf_counter()
        try:
            response = self._client.send(http_request, stream=True)
            try:
                chunks: list[bytes] = []
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    if context.cancelled:
                        break
            finally:
                response.close()
        except httpx.TransportError as exc:
            state.http_metric = HttpMetric(
                resource_path=state.resource_path,
                status="",
                status_code=0,
                retry_count=state.retry_count,
                error=exc,
                duration=time.perf_counter() - started,
            )
            if context.cancelled or context.expired:
                raise RequestCancelledError(
                    f"Request to {state.resource_path} was abandoned: {exc}"
                ) from exc
            decision = should_retry(
                None,
                transport_error=True,
                attempts=attempt_num,
                max_retries=self.retry_count,
            )
            if decision is RetryDecision.RETRY:
                logger.warning(
                    "Retrying API request after transport error",
                    resource_path=state.resource_path,
                    attempt=attempt_num,
                    error=str(exc),
                )
                return True
            raise TransportError(
                f"Request to {state.resource_path} failed: {exc}"
            ) from exc

        state.response = response
        state.body = b"".join(chunks)
        state.http_metric = HttpMetric(
            resource_path=state.resource_path,
            status=f"{response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
            retry_count=state.retry_count,
            duration=time.perf_counter() - started,
        )
        if context.cancelled:
            raise RequestCancelledError(
                f"Request to {state.resource_path} was cancelled"
                " while receiving the response"
            )
        decision = should_retry(
            response.status_code,
            transport_error=False,
            attempts=attempt_num,
            max_retries=self.retry_count,
        )
        if decision is RetryDecision.RETRY:
            logger.warning(
                "Retrying API request",
                resource_path=state.resource_path,
                attempt=attempt_num,
                status_code=response.status_code,
            )
            return True
        return False

    @staticmethod
    def _record_metadata(
        response: httpx.Response, state: RetryState, result: Result
    ) -> ResponseEnvelope:
        """Copy the facts of the last HTTP exchange onto ``result.metadata``."""
        metadata = result.metadata
        metadata.retry_count = state.retry_count
        rate_limit = RateLimitInfo.from_headers(response.headers)
        metadata.rate_limit_state = rate_limit.state
        metadata.rate_limit_reason = rate_limit.reason
        metadata.rate_limit_period = rate_limit.period
        envelope = parse_error_envelope(state.body)
        metadata.request_id = envelope.request_id or ""
        metadata.response_time = envelope.took or 0.0
        state.metadata_recorded = True
        return envelope

    @classmethod
    def _handle_response(cls, state: RetryState, result: Result) -> None:
        response = state.response
        if response is None:
            raise TransportError(f"No response received for {state.resource_path}")

        envelope = cls._record_metadata(response, state, result)
        response_class = classify_status(response.status_code)
        if response_class is ResponseClass.SUCCESS:
            decode(state.body, result)
            return

        metadata = result.metadata
        error_cls = _ERRORS_BY_CLASS.get(response_class, ApiError)
        error = error_cls(
            status_code=response.status_code,
            message=envelope.message or response.reason_phrase,
            request_id=metadata.request_id,
            took=envelope.took,
            errors=envelope.errors,
            metadata=metadata.model_copy(),
        )
        logger.warning(
            "API request failed",
            resource_path=state.resource_path,
            status_code=response.status_code,
            request_id=metadata.request_id,
            rate_limit_state=metadata.rate_limit_state or None,
        )
        raise error

    def _publish(self, category: MetricCategory, metric: Metric) -> None:
        record_metric(metric)
        self._bus.publish(category, metric)

    def _publish_metrics(
        self,
        request: Request,
        result: Result,
        state: RetryState,
        error: Exception | None,
    ) -> None:
        if state.http_metric is not None:
            self._publish(MetricCategory.HTTP, state.http_metric)
        if state.response is not None:
            self._publish(
                MetricCategory.API,
                ApiMetric(
                    resource_path=state.resource_path,
                    result_metadata=result.metadata.model_copy(),
                ),
            )
        error_type = ""
        if error is not None:
            error_type = (
                error.error_type if isinstance(error, OpsGenieError) else "sdk-error"
            )
        self._publish(
            MetricCategory.SDK,
            SdkMetric(
                resource_path=state.resource_path,
                error_type=error_type,
                error_message=str(error) if error is not None else "",
                request_details=request,
                result_details=result,
            ),
        )
