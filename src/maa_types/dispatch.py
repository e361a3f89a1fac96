"""Decode callback events and hand the resulting messages to a consumer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from maa_types.message import (
    Message,
    UnknownDiscriminant,
    UnknownMessageCode,
    classify,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from maa_types.config import DecoderConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchStats:
    """Counts of envelopes decoded and skipped by one dispatcher."""

    decoded: int
    skipped: int


class MessageDispatcher:
    """Decode ``(code, payload)`` envelopes and pass each message to ``on_message``.

    Unknown codes and discriminants are either raised or logged and skipped,
    depending on ``DecoderConfig.skip_unknown``. Malformed payloads and
    errors raised by ``on_message`` always propagate.
    """

    def __init__(
        self,
        config: DecoderConfig,
        on_message: Callable[[Message], None] | None = None,
    ) -> None:
        """Initialize with decoder configuration and an optional message handler."""
        self._config = config
        self._on_message = on_message
        self._decoded = 0
        self._skipped = 0

    def dispatch(self, code: int, payload: str) -> Message | None:
        """Decode one envelope; return the message, or None when it was skipped."""
        try:
            message = classify(code, payload)
        except UnknownMessageCode as exc:
            if not self._config.skip_unknown:
                raise
            logger.warning("Skipping message with unknown code=%d", exc.code)
            self._skipped += 1
            return None
        except UnknownDiscriminant as exc:
            if not self._config.skip_unknown:
                raise
            logger.warning(
                "Skipping message code=%d — unknown %s=%r", code, exc.context, exc.value
            )
            self._skipped += 1
            return None

        self._decoded += 1
        if self._on_message is not None:
            self._on_message(message)
        return message

    def dispatch_many(self, envelopes: Iterable[tuple[int, str]]) -> list[Message]:
        """Dispatch envelopes in order and return the messages that were decoded."""
        messages: list[Message] = []
        for code, payload in envelopes:
            message = self.dispatch(code, payload)
            if message is not None:
                messages.append(message)
        return messages

    def stats(self) -> DispatchStats:
        """Return the decoded and skipped counts so far."""
        return DispatchStats(decoded=self._decoded, skipped=self._skipped)
