"""Opsgenie heartbeat API client."""

from __future__ import annotations

from typing import TYPE_CHECKING

from opsgenie_sdk.heartbeat.models import (
    AddRequest,
    DeleteRequest,
    DeleteResult,
    DisableRequest,
    EnableRequest,
    GetRequest,
    GetResult,
    HeartbeatInfo,
    ListRequest,
    ListResult,
    PingRequest,
    PingResult,
    UpdateRequest,
)

if TYPE_CHECKING:
    from opsgenie_sdk.client import OpsGenieClient
    from opsgenie_sdk.context import CallContext


class HeartbeatApi:
    """Heartbeat operations on top of ``OpsGenieClient``.

    Example:
        >>> client = OpsGenieClient(ClientSettings(api_key="..."))
        >>> heartbeats = HeartbeatApi(client)
        >>> heartbeats.ping("web-frontend").message
        'PONG - Heartbeat received'
    """

    def __init__(self, client: OpsGenieClient) -> None:
        self._client = client

    def add(
        self, request: AddRequest, context: CallContext | None = None
    ) -> HeartbeatInfo:
        """Create a heartbeat.

        Args:
            request: heartbeat definition
            context: optional cancellation signal and deadline

        Returns:
            HeartbeatInfo with name, enabled and expired state
        """
        return self._client.execute(request, HeartbeatInfo(), context)

    def update(
        self, request: UpdateRequest, context: CallContext | None = None
    ) -> HeartbeatInfo:
        return self._client.execute(request, HeartbeatInfo(), context)

    def get(self, name: str, context: CallContext | None = None) -> GetResult:
        """Fetch a heartbeat by name.

        Example:
            >>> heartbeats.get("web-frontend").heartbeat.interval_unit
            <IntervalUnit.MINUTES: 'minutes'>
        """
        return self._client.execute(
            GetRequest(heartbeat_name=name), GetResult(), context
        )

    def list(self, context: CallContext | None = None) -> ListResult:
        return self._client.execute(ListRequest(), ListResult(), context)

    def delete(self, name: str, context: CallContext | None = None) -> DeleteResult:
        return self._client.execute(
            DeleteRequest(heartbeat_name=name), DeleteResult(), context
        )

    def enable(self, name: str, context: CallContext | None = None) -> HeartbeatInfo:
        return self._client.execute(
            EnableRequest(heartbeat_name=name), HeartbeatInfo(), context
        )

    def disable(
        self, name: str, context: CallContext | None = None
    ) -> HeartbeatInfo:
        return self._client.execute(
            DisableRequest(heartbeat_name=name), HeartbeatInfo(), context
        )

    def ping(self, name: str, context: CallContext | None = None) -> PingResult:
        """Send a heartbeat ping.

        Args:
            name: heartbeat name
            context: optional cancellation signal and deadline

        Returns:
            PingResult; ``message`` holds the ``result`` text of the response
        """
        return self._client.execute(
            PingRequest(heartbeat_name=name), PingResult(), context
        )
