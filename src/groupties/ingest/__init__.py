"""Input adapters that normalize raw tournament results into match records."""

from .startgg import (
    SCORES_QUERY,
    FeedError,
    FeedHTTPError,
    FeedPage,
    GraphQLError,
    NoDataError,
    RequestThrottle,
    ResponseFormatError,
    StartGGFeed,
    parse_scores_response,
)

__all__ = [
    "SCORES_QUERY",
    "FeedError",
    "FeedHTTPError",
    "FeedPage",
    "GraphQLError",
    "NoDataError",
    "RequestThrottle",
    "ResponseFormatError",
    "StartGGFeed",
    "parse_scores_response",
]
