"""Request and result contracts shared by all Opsgenie resources.

Following the typed-model approach of the API clients in this repository:
- Requests and results are Pydantic models
- Requests are immutable (frozen=True)
- Results are filled in place by the request executor
"""

from __future__ import annotations

from typing import Any, ClassVar, Protocol

from pydantic import BaseModel, ConfigDict, Field

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class Request(Protocol):
    """Capabilities every request passed to ``OpsGenieClient.execute`` provides."""

    def resource_path(self) -> str: ...

    def method(self) -> str: ...

    def validate(self) -> None:
        """Raise ``RequestValidationError`` (or ``ValueError``) when invalid."""
        ...

    def request_params(self) -> dict[str, Any]: ...

    def request_body(self) -> Any: ...


class BaseRequest(BaseModel):
    """Default implementation of the optional parts of ``Request``.

    Subclasses implement ``resource_path`` and usually ``validate``. Fields
    that only feed the resource path should be declared with
    ``Field(exclude=True)`` so they stay out of the JSON body.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def resource_path(self) -> str:
        raise NotImplementedError

    def method(self) -> str:
        return "GET"

    def validate(self) -> None:  # type: ignore[override]
        return None

    def request_params(self) -> dict[str, Any]:
        return {}

    def request_body(self) -> Any:
        if self.method().upper() not in BODY_METHODS:
            return None
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ResultMetadata(BaseModel):
    """Facts about the HTTP exchange, filled in after every completed call.

    Attributes:
        request_id: ``requestId`` of the response envelope
        response_time: ``took`` of the response envelope (seconds)
        rate_limit_state: ``X-RateLimit-State`` response header
        rate_limit_reason: ``X-RateLimit-Reason`` response header
        rate_limit_period: ``X-RateLimit-Period-In-Sec`` response header
        retry_count: retries made before the final attempt
    """

    request_id: str = ""
    response_time: float = 0.0
    rate_limit_state: str = ""
    rate_limit_reason: str = ""
    rate_limit_period: str = ""
    retry_count: int = 0


class Result(BaseModel):
    """Base class for typed API results.

    ``data_field`` names the field that receives the ``data`` member of the
    response envelope. Leave it as ``None`` when the result's fields live
    directly inside a ``data`` object or at the top level of the body.

    Example:
        >>> class ListTeamsResult(Result):
        ...     data_field: ClassVar[str | None] = "teams"
        ...     teams: list[Team] = []
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    data_field: ClassVar[str | None] = None

    metadata: ResultMetadata = Field(default_factory=ResultMetadata, exclude=True)

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if cls.data_field is not None and cls.data_field not in cls.model_fields:
            raise TypeError(
                f"{cls.__name__}.data_field refers to unknown field {cls.data_field!r}"
            )


class ResponseEnvelope(BaseModel):
    """Wire envelope of every Opsgenie response body.

    Keys other than the envelope's own are kept in ``model_extra``.
    """

    model_config = ConfigDict(extra="allow")

    data: Any = None
    took: float | None = None
    request_id: str | None = Field(None, alias="requestId")
    message: str | None = None
    errors: dict[str, Any] | None = None
