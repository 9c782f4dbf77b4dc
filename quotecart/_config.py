"""
Settings — one config object loaded from the environment.

    from quotecart import load_settings, configure_logging

    settings = load_settings()          # reads QUOTECART_* variables
    configure_logging(settings)

Variables (all optional):
    QUOTECART_CURRENCY_SYMBOL         default "$"
    QUOTECART_DISPLAY_PLACES          default 2
    QUOTECART_CHECKOUT_TTL_SECONDS    default 3600 (duplicate-submit memory)
    QUOTECART_LOG_LEVEL               default "INFO"
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields
from datetime import timedelta

ENV_PREFIX = "QUOTECART_"


@dataclass(frozen=True, slots=True)
class Settings:
    currency_symbol: str = "$"
    display_places: int = 2
    checkout_ttl_seconds: int = 3600
    log_level: str = "INFO"

    @property
    def checkout_ttl(self) -> timedelta | None:
        if self.checkout_ttl_seconds <= 0:
            return None
        return timedelta(seconds=self.checkout_ttl_seconds)


def load_settings(
    environ: Mapping[str, str] | None = None,
    prefix: str = ENV_PREFIX,
    **overrides: object,
) -> Settings:
    """
    Build Settings from environment variables with prefix.

    Unknown variables are ignored; explicit overrides win over the environment.
    """
    env = os.environ if environ is None else environ
    known = {f.name: f.type for f in fields(Settings)}
    values: dict[str, object] = {}

    for key, raw in env.items():
        if not key.startswith(prefix):
            continue
        name = key[len(prefix):].lower()
        if name not in known:
            continue
        values[name] = int(raw) if known[name] in (int, "int") else raw.strip()

    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


def configure_logging(settings: Settings) -> None:
    """Set the level of the package logger tree."""
    logging.getLogger("quotecart").setLevel(settings.log_level.upper())


__all__ = (
    "ENV_PREFIX",
    "Settings",
    "load_settings",
    "configure_logging",
)
