from __future__ import annotations

import os
from dataclasses import dataclass


def parse_bool(raw: str | None, default: bool = False) -> bool:
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y"}


def env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


@dataclass(frozen=True, slots=True)
class CheckoutSettings:
    submit_timeout_seconds: float
    log_level: str

    @classmethod
    def from_env(cls) -> "CheckoutSettings":
        return cls(
            submit_timeout_seconds=env_float("LABCART_SUBMIT_TIMEOUT_SECONDS", 15.0),
            log_level=os.getenv("LABCART_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )
