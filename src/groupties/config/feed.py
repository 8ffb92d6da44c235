"""Settings for the start.gg results feed."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace

from groupties import __version__


logger = logging.getLogger(__name__)

_ENDPOINT_ENV = "GROUPTIES_ENDPOINT"
_REQUEST_INTERVAL_ENV = "GROUPTIES_REQUEST_INTERVAL"
_TIMEOUT_ENV = "GROUPTIES_TIMEOUT"
_PHASE_ENV = "GROUPTIES_PHASE"
_PER_PAGE_ENV = "GROUPTIES_PER_PAGE"
_MAX_RETRIES_ENV = "GROUPTIES_MAX_RETRIES"
API_KEY_ENV = "STARTGG_API_KEY"


@dataclass(frozen=True)
class FeedSettings:
    endpoint: str = "https://api.start.gg/gql/alpha"
    # start.gg allows an average of 80 requests per 60 seconds.
    request_interval: float = 60.0 / 80
    timeout: float = 30.0
    user_agent: str = f"groupties/{__version__}"
    phase_name: str = "Groups"
    per_page: int = 50
    max_retries: int = 2


DEFAULT_FEED_SETTINGS = FeedSettings()


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def load_feed_settings(base: FeedSettings = DEFAULT_FEED_SETTINGS) -> FeedSettings:
    """Apply environment overrides on top of ``base``."""

    return replace(
        base,
        endpoint=os.getenv(_ENDPOINT_ENV) or base.endpoint,
        request_interval=_env_float(_REQUEST_INTERVAL_ENV, base.request_interval, clamp_min=0.0),
        timeout=_env_float(_TIMEOUT_ENV, base.timeout, clamp_min=1.0),
        phase_name=os.getenv(_PHASE_ENV) or base.phase_name,
        per_page=_env_int(_PER_PAGE_ENV, base.per_page, min_value=1),
        max_retries=_env_int(_MAX_RETRIES_ENV, base.max_retries, min_value=0),
    )


def resolve_api_key(explicit: str | None = None) -> str | None:
    if explicit:
        return explicit
    return os.getenv(API_KEY_ENV) or None
