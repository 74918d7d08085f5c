"""Metric snapshots published once per ``execute`` call."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from opsgenie_sdk.models import ResultMetadata


class MetricCategory(StrEnum):
    HTTP = "http"
    API = "api"
    SDK = "sdk"


@dataclass(frozen=True)
class HttpMetric:
    """Transport-level view of the final attempt.

    Attributes:
        resource_path: resource path of the request
        status: status line, e.g. "200 OK"; empty when no response arrived
        status_code: HTTP status code; 0 when no response arrived
        retry_count: retries made before this attempt
        error: transport exception of this attempt, if any
        duration: seconds spent in this attempt
    """

    resource_path: str
    status: str
    status_code: int
    retry_count: int
    error: Exception | None = None
    duration: float = 0.0


@dataclass(frozen=True)
class ApiMetric:
    """API-level view of a completed HTTP exchange."""

    resource_path: str
    result_metadata: ResultMetadata


@dataclass(frozen=True)
class SdkMetric:
    """Outcome of the call as seen by the caller.

    ``error_type`` and ``error_message`` are empty on success.
    """

    resource_path: str
    error_type: str = ""
    error_message: str = ""
    request_details: Any = None
    result_details: Any = None


type Metric = HttpMetric | ApiMetric | SdkMetric
