"""Opsgenie heartbeat API client and models.

Example:
    >>> from opsgenie_sdk import ClientSettings, OpsGenieClient
    >>> from opsgenie_sdk.heartbeat import HeartbeatApi
    >>> with OpsGenieClient(ClientSettings(api_key="...")) as client:
    ...     print(HeartbeatApi(client).ping("web-frontend").message)
"""

from opsgenie_sdk.heartbeat.client import HeartbeatApi
from opsgenie_sdk.heartbeat.models import (
    AddRequest,
    DeleteRequest,
    DeleteResult,
    DisableRequest,
    EnableRequest,
    GetRequest,
    GetResult,
    Heartbeat,
    HeartbeatInfo,
    IntervalUnit,
    ListRequest,
    ListResult,
    OwnerTeam,
    PingRequest,
    PingResult,
    Priority,
    UpdateRequest,
)

__all__ = [
    "AddRequest",
    "DeleteRequest",
    "DeleteResult",
    "DisableRequest",
    "EnableRequest",
    "GetRequest",
    "GetResult",
    "Heartbeat",
    "HeartbeatApi",
    "HeartbeatInfo",
    "IntervalUnit",
    "ListRequest",
    "ListResult",
    "OwnerTeam",
    "PingRequest",
    "PingResult",
    "Priority",
    "UpdateRequest",
]
