"""Tests for decoder error types."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError

from maa_types.message.errors import (
    MessageDecodeError,
    PayloadDecodeError,
    UnknownDiscriminant,
    UnknownMessageCode,
)


class _Inner(BaseModel):
    count: int


class _Outer(BaseModel):
    inner: _Inner


def _validation_error() -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        _Outer.model_validate({"inner": {"count": "many"}})
    return exc_info.value


@pytest.mark.parametrize(
    "error",
    [
        UnknownMessageCode(99),
        UnknownDiscriminant("what", "X"),
        PayloadDecodeError("payload", None, ValueError("bad")),
    ],
)
def test_errors_share_base(error: Exception) -> None:
    """Callers can catch every decoder failure with one except clause."""
    assert isinstance(error, MessageDecodeError)


def test_messages() -> None:
    assert str(UnknownMessageCode(99)) == "Unknown message code: 99"
    assert str(UnknownDiscriminant("subtask", "Foo")) == "Unknown subtask discriminant: 'Foo'"
    assert str(PayloadDecodeError("details", "details.stars", ValueError("bad"))) == (
        "Failed to decode details field 'details.stars': bad"
    )


def test_from_validation_error_uses_first_location() -> None:
    error = PayloadDecodeError.from_validation_error("payload", _validation_error())

    assert error.field == "inner.count"
    assert isinstance(error.cause, ValidationError)


def test_from_validation_error_prefix_and_skip() -> None:
    error = PayloadDecodeError.from_validation_error(
        "details", _validation_error(), prefix=("details",), skip=1
    )

    assert error.field == "details.count"
