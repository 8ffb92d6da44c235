"""Canonical match models shared across ingestion and standings layers."""

from .match import (
    PENDING,
    Decided,
    GroupRecord,
    MalformedRecordError,
    MatchOutcome,
    MatchRecord,
    Pending,
    PlayerId,
    PlayerPair,
    normalize_player_id,
    outcome_from_placements,
)

__all__ = [
    "PENDING",
    "Decided",
    "GroupRecord",
    "MalformedRecordError",
    "MatchOutcome",
    "MatchRecord",
    "Pending",
    "PlayerId",
    "PlayerPair",
    "normalize_player_id",
    "outcome_from_placements",
]
