"""Shared JSON and schema helpers for the message decoders."""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from maa_types.message.errors import DecodePhase, PayloadDecodeError

T = TypeVar("T")


def load_object(payload: str, *, phase: DecodePhase) -> dict[str, Any]:
    """Parse ``payload`` as JSON and require a top-level object."""
    try:
        value = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise PayloadDecodeError(phase, None, exc) from exc
    if not isinstance(value, dict):
        cause = TypeError(f"expected a JSON object, got {type(value).__name__}")
        raise PayloadDecodeError(phase, None, cause)
    return value


def validate(
    adapter: TypeAdapter[T],
    data: Any,
    *,
    phase: DecodePhase,
    prefix: tuple[str, ...] = (),
    skip: int = 0,
) -> T:
    """Validate already-parsed JSON data, mapping failures to ``PayloadDecodeError``.

    The data is re-encoded and validated in JSON mode so strict records read
    enum members from their string values, exactly as they arrive on the wire.
    """
    try:
        return adapter.validate_json(json.dumps(data))
    except ValidationError as exc:
        raise PayloadDecodeError.from_validation_error(
            phase, exc, prefix=prefix, skip=skip
        ) from exc


def validate_json(adapter: TypeAdapter[T], payload: str, *, phase: DecodePhase) -> T:
    """Parse and validate payload text in one step."""
    try:
        return adapter.validate_json(payload)
    except ValidationError as exc:
        raise PayloadDecodeError.from_validation_error(phase, exc) from exc
