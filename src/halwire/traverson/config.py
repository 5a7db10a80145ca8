from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv


@dataclass(frozen=True)
class ResolverConfig:
    timeout_seconds: float = 10.0
    accept: str = "application/hal+json"
    max_retries: int = 2  # total extra attempts
    backoff_base_seconds: float = 0.3  # 0.3, 0.6, 1.2...
    retry_statuses: frozenset[int] = frozenset({502, 503, 504})
    retry_on_429: bool = False


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if val in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _get_int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _get_float_env(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def load_env_config(*, use_dotenv: bool = True) -> ResolverConfig:
    """Resolver settings from HALWIRE_HTTP_* environment variables (optional .env)."""
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))
    defaults = ResolverConfig()
    return ResolverConfig(
        timeout_seconds=_get_float_env(
            "HALWIRE_HTTP_TIMEOUT_SECONDS", defaults.timeout_seconds
        ),
        accept=(os.getenv("HALWIRE_HTTP_ACCEPT") or "").strip() or defaults.accept,
        max_retries=_get_int_env("HALWIRE_HTTP_MAX_RETRIES", defaults.max_retries),
        backoff_base_seconds=_get_float_env(
            "HALWIRE_HTTP_BACKOFF_SECONDS", defaults.backoff_base_seconds
        ),
        retry_on_429=_get_bool_env("HALWIRE_HTTP_RETRY_ON_429", defaults.retry_on_429),
    )


__all__ = ["ResolverConfig", "load_env_config"]
