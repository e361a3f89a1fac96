"""Typed failures raised while decoding MaaCore callback messages."""

from __future__ import annotations

from typing import Literal

from pydantic import ValidationError

DecodePhase = Literal["payload", "envelope", "details"]


class MessageDecodeError(Exception):
    """Base class for every failure raised by the message decoder."""


class UnknownMessageCode(MessageDecodeError):
    """The numeric message code is not part of the callback protocol."""

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(f"Unknown message code: {code}")


class UnknownDiscriminant(MessageDecodeError):
    """A string discriminant inside the payload names no known case.

    ``context`` is the payload field that carried the discriminant
    (``subtask`` or ``what``) and ``value`` is what the engine sent.
    """

    def __init__(self, context: str, value: str) -> None:
        self.context = context
        self.value = value
        super().__init__(f"Unknown {context} discriminant: {value!r}")


class PayloadDecodeError(MessageDecodeError):
    """The payload text is not valid JSON or does not match the expected record."""

    def __init__(self, phase: DecodePhase, field: str | None, cause: Exception) -> None:
        self.phase = phase
        self.field = field
        self.cause = cause
        location = f" field {field!r}" if field else ""
        super().__init__(f"Failed to decode {phase}{location}: {cause}")

    @classmethod
    def from_validation_error(
        cls,
        phase: DecodePhase,
        exc: ValidationError,
        *,
        prefix: tuple[str, ...] = (),
        skip: int = 0,
    ) -> PayloadDecodeError:
        """Build an error pointing at the first failing location of ``exc``.

        ``skip`` drops leading location parts that pydantic adds for tagged
        unions; ``prefix`` is prepended to the remainder.
        """
        errors = exc.errors()
        loc = tuple(str(part) for part in errors[0]["loc"][skip:]) if errors else ()
        field = ".".join(prefix + loc) or None
        return cls(phase, field, exc)
