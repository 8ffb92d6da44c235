"""Configuration helpers for the results feed."""

from .feed import API_KEY_ENV, DEFAULT_FEED_SETTINGS, FeedSettings, load_feed_settings, resolve_api_key

__all__ = [
    "API_KEY_ENV",
    "DEFAULT_FEED_SETTINGS",
    "FeedSettings",
    "load_feed_settings",
    "resolve_api_key",
]
