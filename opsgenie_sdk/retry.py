"""Retry decisions and response classification.

Everything in this module is pure: no I/O, no clock, no shared state.
"""

from __future__ import annotations

import http
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

RATE_LIMIT_STATE_HEADER = "X-RateLimit-State"
RATE_LIMIT_REASON_HEADER = "X-RateLimit-Reason"
RATE_LIMIT_PERIOD_HEADER = "X-RateLimit-Period-In-Sec"


class RetryDecision(StrEnum):
    RETRY = "retry"
    STOP = "stop"


class ResponseClass(StrEnum):
    """Outcome classes of an HTTP status code."""

    SUCCESS = "success"
    UNPROCESSABLE = "unprocessable"
    CLIENT_ERROR = "client-error"
    RATE_LIMITED = "rate-limited"
    SERVER_ERROR = "server-error"
    UNEXPECTED = "unexpected"


def classify_status(status_code: int) -> ResponseClass:
    """Map an HTTP status code to its ``ResponseClass``.

    Example:
        >>> classify_status(429)
        <ResponseClass.RATE_LIMITED: 'rate-limited'>
    """
    if http.HTTPStatus.OK <= status_code < http.HTTPStatus.MULTIPLE_CHOICES:
        return ResponseClass.SUCCESS
    if status_code == http.HTTPStatus.TOO_MANY_REQUESTS:
        return ResponseClass.RATE_LIMITED
    if status_code == http.HTTPStatus.UNPROCESSABLE_ENTITY:
        return ResponseClass.UNPROCESSABLE
    if http.HTTPStatus.BAD_REQUEST <= status_code < http.HTTPStatus.INTERNAL_SERVER_ERROR:
        return ResponseClass.CLIENT_ERROR
    if http.HTTPStatus.INTERNAL_SERVER_ERROR <= status_code <= 599:  # noqa: PLR2004
        return ResponseClass.SERVER_ERROR
    return ResponseClass.UNEXPECTED


def is_retryable_status(status_code: int) -> bool:
    return classify_status(status_code) in {
        ResponseClass.RATE_LIMITED,
        ResponseClass.SERVER_ERROR,
    }


def should_retry(
    status_code: int | None,
    *,
    transport_error: bool,
    attempts: int,
    max_retries: int,
) -> RetryDecision:
    """Decide whether another attempt should be made.

    Retries are immediate: there is no backoff between attempts, only the
    attempt bound.

    Args:
        status_code: status code of the last attempt, None if it got no response
        transport_error: the last attempt failed before a response arrived
        attempts: attempts made so far, including the last one
        max_retries: configured number of additional attempts

    Returns:
        RetryDecision.RETRY or RetryDecision.STOP
    """
    if attempts >= max_retries + 1:
        return RetryDecision.STOP
    if transport_error:
        return RetryDecision.RETRY
    if status_code is not None and is_retryable_status(status_code):
        return RetryDecision.RETRY
    return RetryDecision.STOP


@dataclass(frozen=True)
class RateLimitInfo:
    """Rate-limit facts announced by Opsgenie response headers.

    Attributes:
        state: e.g. "THROTTLED"
        reason: e.g. "ACCOUNT"
        period: throttling period in seconds, as sent ("60")
    """

    state: str = ""
    reason: str = ""
    period: str = ""

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimitInfo:
        return cls(
            state=headers.get(RATE_LIMIT_STATE_HEADER, ""),
            reason=headers.get(RATE_LIMIT_REASON_HEADER, ""),
            period=headers.get(RATE_LIMIT_PERIOD_HEADER, ""),
        )

    @property
    def throttled(self) -> bool:
        return bool(self.state)
