"""Response body decoding with ``data`` envelope unwrapping.

Which fields a response body fills is decided by the result type:

| ``data_field`` | body ``data``             | mapped onto result fields          |
|----------------|---------------------------|------------------------------------|
| set            | present                   | ``{data_field: data}``             |
| set            | absent                    | nothing                            |
| None           | JSON object               | the object's keys                  |
| None           | array / scalar / absent   | top-level keys minus envelope keys |
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import ValidationError

from opsgenie_sdk.exceptions import DecodeError
from opsgenie_sdk.models import ResponseEnvelope, Result

logger = structlog.get_logger(__name__)

ENVELOPE_KEYS = frozenset({"data", "took", "requestId", "message", "errors"})


def _describe(exc: ValidationError) -> str:
    return "; ".join(error["msg"] for error in exc.errors())


def parse_envelope(raw: bytes) -> ResponseEnvelope:
    """Parse a response body into its envelope.

    Raises:
        DecodeError: body is not a JSON object
    """
    try:
        return ResponseEnvelope.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(_describe(exc)) from exc


def parse_error_envelope(raw: bytes) -> ResponseEnvelope:
    """Parse a response body without failing.

    Error bodies are not guaranteed to be valid JSON; the raw text becomes
    the message in that case. Also used to read ``requestId`` and ``took``
    from bodies that are never decoded (cancelled calls).
    """
    try:
        return ResponseEnvelope.model_validate_json(raw)
    except ValidationError:
        text = raw.decode("utf-8", errors="replace").strip()
        return ResponseEnvelope(message=text or None)


def unwrap(envelope: ResponseEnvelope, data_field: str | None) -> dict[str, Any]:
    """Select the body members that map onto the result's own fields."""
    if data_field is not None:
        return {} if envelope.data is None else {data_field: envelope.data}
    if isinstance(envelope.data, dict):
        return dict(envelope.data)
    return {
        key: value
        for key, value in (envelope.model_extra or {}).items()
        if key not in ENVELOPE_KEYS
    }


def decode(raw: bytes, result: Result) -> None:
    """Decode a successful response body into ``result`` in place.

    ``result.metadata`` receives ``requestId`` and ``took``; the remaining
    fields are selected by ``unwrap`` and validated against the result type.

    Raises:
        DecodeError: malformed JSON or a body that does not fit the result type
    """
    envelope = parse_envelope(raw)
    result.metadata.request_id = envelope.request_id or ""
    result.metadata.response_time = envelope.took or 0.0

    result_type = type(result)
    payload = unwrap(envelope, result_type.data_field)
    payload.pop("metadata", None)
    try:
        parsed = result_type.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(_describe(exc)) from exc

    for name in parsed.model_fields_set:
        setattr(result, name, getattr(parsed, name))
    logger.debug(
        "Decoded response",
        result_type=result_type.__name__,
        fields=sorted(parsed.model_fields_set),
        request_id=result.metadata.request_id,
    )
