"""Environment-driven configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _env_flag(key: str, default: bool = False) -> bool:
    value = _env(key)
    if not value:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("MAA_ENV", "development"))
    log_level: str = field(default_factory=lambda: _env("MAA_LOG_LEVEL", "INFO"))

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class DecoderConfig:
    """How the dispatcher treats messages the decoder does not recognise.

    When ``skip_unknown`` is set, unknown codes and discriminants are logged
    and skipped instead of raised. Malformed payloads always raise.
    """

    skip_unknown: bool = field(default_factory=lambda: _env_flag("MAA_SKIP_UNKNOWN"))


@dataclass(frozen=True)
class Settings:
    app: AppConfig = field(default_factory=AppConfig)
    decoder: DecoderConfig = field(default_factory=DecoderConfig)


def load_settings() -> Settings:
    """Read settings from the current environment."""
    return Settings()
