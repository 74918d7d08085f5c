"""Pydantic models for the Opsgenie heartbeat API (``/v2/heartbeats``)."""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from opsgenie_sdk.exceptions import RequestValidationError
from opsgenie_sdk.models import BaseRequest, Result

RESOURCE_PATH = "/v2/heartbeats"


def heartbeat_path(name: str, action: str = "") -> str:
    """Resource path of a named heartbeat; the name is escaped as one segment."""
    path = f"{RESOURCE_PATH}/{quote(name, safe='')}"
    return f"{path}/{action}" if action else path


class IntervalUnit(StrEnum):
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"


class Priority(StrEnum):
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    P4 = "P4"
    P5 = "P5"


class OwnerTeam(BaseModel):
    """Team owning a heartbeat, referenced by id or name."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str | None = None


class Heartbeat(BaseModel):
    """A heartbeat as returned by the get and list endpoints."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str = ""
    interval: int = 0
    interval_unit: IntervalUnit | None = Field(None, alias="intervalUnit")
    enabled: bool = False
    expired: bool = False
    owner_team: OwnerTeam | None = Field(None, alias="ownerTeam")
    alert_message: str = Field("", alias="alertMessage")
    alert_tags: list[str] = Field(default_factory=list, alias="alertTags")
    alert_priority: Priority | None = Field(None, alias="alertPriority")


def _validate_name(name: str) -> None:
    if not name.strip():
        raise RequestValidationError("Invalid request. Name cannot be empty.")


class _NamedHeartbeatRequest(BaseRequest):
    heartbeat_name: str = Field(..., exclude=True)

    def validate(self) -> None:
        _validate_name(self.heartbeat_name)


class AddRequest(BaseRequest):
    """Create a heartbeat."""

    name: str
    interval: int
    interval_unit: IntervalUnit = Field(..., alias="intervalUnit")
    enabled: bool
    description: str | None = None
    owner_team: OwnerTeam | None = Field(None, alias="ownerTeam")
    alert_message: str | None = Field(None, alias="alertMessage")
    alert_tags: list[str] | None = Field(None, alias="alertTags")
    alert_priority: Priority | None = Field(None, alias="alertPriority")

    def resource_path(self) -> str:
        return RESOURCE_PATH

    def method(self) -> str:
        return "POST"

    def validate(self) -> None:
        _validate_name(self.name)
        if self.interval < 1:
            raise RequestValidationError(
                "Invalid request. Interval cannot be smaller than 1."
            )


class UpdateRequest(AddRequest):
    """Update an existing heartbeat, identified by ``name``."""

    def resource_path(self) -> str:
        return heartbeat_path(self.name)

    def method(self) -> str:
        return "PATCH"


class GetRequest(_NamedHeartbeatRequest):
    def resource_path(self) -> str:
        return heartbeat_path(self.heartbeat_name)


class DeleteRequest(_NamedHeartbeatRequest):
    def resource_path(self) -> str:
        return heartbeat_path(self.heartbeat_name)

    def method(self) -> str:
        return "DELETE"


class EnableRequest(_NamedHeartbeatRequest):
    def resource_path(self) -> str:
        return heartbeat_path(self.heartbeat_name, "enable")

    def method(self) -> str:
        return "POST"


class DisableRequest(_NamedHeartbeatRequest):
    def resource_path(self) -> str:
        return heartbeat_path(self.heartbeat_name, "disable")

    def method(self) -> str:
        return "POST"


class PingRequest(_NamedHeartbeatRequest):
    def resource_path(self) -> str:
        return heartbeat_path(self.heartbeat_name, "ping")


class ListRequest(BaseRequest):
    def resource_path(self) -> str:
        return RESOURCE_PATH


class HeartbeatInfo(Result):
    """Short heartbeat state returned by add, update, enable and disable."""

    name: str = ""
    enabled: bool = False
    expired: bool = False


class GetResult(Result):
    data_field: ClassVar[str | None] = "heartbeat"

    heartbeat: Heartbeat | None = None


class ListResult(Result):
    heartbeats: list[Heartbeat] = []


class PingResult(Result):
    message: str = Field("", alias="result")


class DeleteResult(Result):
    message: str = Field("", alias="result")
