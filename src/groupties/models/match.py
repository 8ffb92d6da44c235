"""Canonical match models shared by the results feed and the standings engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict


PlayerId = str


class MalformedRecordError(ValueError):
    """Raised when match data contradicts itself and no score can be inferred."""


def normalize_player_id(value: Any) -> PlayerId:
    """Collapse numeric and textual identifiers into one canonical token."""

    if isinstance(value, bool):
        raise ValueError(f"player id must be a string or integer, got {value!r}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        token = value.strip()
        if not token:
            raise ValueError("player id must not be empty")
        return token
    raise ValueError(f"player id must be a string or integer, got {type(value).__name__}")


@dataclass(frozen=True, order=True)
class PlayerPair:
    """Unordered pairing of two distinct players, stored in ascending order."""

    first: PlayerId
    second: PlayerId

    def __post_init__(self) -> None:
        if self.first == self.second:
            raise ValueError(f"player {self.first!r} cannot be paired with themselves")
        if self.first > self.second:
            raise ValueError("pair members must be ascending; build pairs with PlayerPair.of")

    @classmethod
    def of(cls, a: PlayerId, b: PlayerId) -> "PlayerPair":
        if a == b:
            raise ValueError(f"player {a!r} cannot be paired with themselves")
        return cls(a, b) if a < b else cls(b, a)

    def __iter__(self) -> Iterator[PlayerId]:
        yield self.first
        yield self.second

    def other(self, player: PlayerId) -> PlayerId:
        if player == self.first:
            return self.second
        if player == self.second:
            return self.first
        raise MalformedRecordError(f"player {player!r} is not part of pair {self.first!r}/{self.second!r}")


@dataclass(frozen=True)
class Decided:
    winner: PlayerId


@dataclass(frozen=True)
class Pending:
    pass


PENDING = Pending()

MatchOutcome = Union[Decided, Pending]


def outcome_from_placements(
    player_a: PlayerId,
    player_b: PlayerId,
    placement_a: int,
    placement_b: int,
) -> MatchOutcome:
    """Resolve relative placements: equal means undecided, otherwise the lower placement wins."""

    if placement_a == placement_b:
        return PENDING
    return Decided(player_a if placement_a < placement_b else player_b)


class MatchRecord(BaseModel):
    """Normalized match payload handed over by a results feed."""

    group_id: str = Field(..., min_length=1)
    player_a: PlayerId
    player_b: PlayerId
    winner: Optional[PlayerId] = None
    player_a_name: Optional[str] = None
    player_b_name: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("group_id", mode="before")
    @classmethod
    def _normalize_group(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("player_a", "player_b", mode="before")
    @classmethod
    def _normalize_players(cls, value: Any) -> PlayerId:
        return normalize_player_id(value)

    @field_validator("winner", mode="before")
    @classmethod
    def _normalize_winner(cls, value: Any) -> Optional[PlayerId]:
        if value is None:
            return None
        return normalize_player_id(value)

    @model_validator(mode="after")
    def _check_members(self) -> "MatchRecord":
        if self.player_a == self.player_b:
            raise ValueError(f"player {self.player_a!r} cannot play themselves")
        if self.winner is not None and self.winner not in (self.player_a, self.player_b):
            raise ValueError(f"winner {self.winner!r} did not play in this match")
        return self

    @classmethod
    def decided(cls, group_id: str, winner: Any, loser: Any, **names: Optional[str]) -> "MatchRecord":
        return cls(group_id=group_id, player_a=winner, player_b=loser, winner=winner, **names)

    @classmethod
    def from_placements(
        cls,
        group_id: str,
        player_a: Any,
        player_b: Any,
        placement_a: int,
        placement_b: int,
        **names: Optional[str],
    ) -> "MatchRecord":
        a = normalize_player_id(player_a)
        b = normalize_player_id(player_b)
        outcome = outcome_from_placements(a, b, placement_a, placement_b)
        winner = outcome.winner if isinstance(outcome, Decided) else None
        return cls(group_id=group_id, player_a=a, player_b=b, winner=winner, **names)

    @property
    def pair(self) -> PlayerPair:
        return PlayerPair.of(self.player_a, self.player_b)

    @property
    def outcome(self) -> MatchOutcome:
        return PENDING if self.winner is None else Decided(self.winner)


@dataclass(frozen=True)
class GroupRecord:
    """Read-only results of one group, keyed by canonical player pair."""

    group_id: str
    results: Mapping[PlayerPair, MatchOutcome] = field(default_factory=dict)

    def __post_init__(self) -> None:
        ordered: dict[PlayerPair, MatchOutcome] = {}
        for pair, outcome in sorted(self.results.items()):
            if isinstance(outcome, Decided):
                if outcome.winner not in pair:
                    raise MalformedRecordError(
                        f"group {self.group_id}: winner {outcome.winner!r} is not part of "
                        f"pair {pair.first!r}/{pair.second!r}"
                    )
            elif not isinstance(outcome, Pending):
                raise TypeError(f"unsupported match outcome {outcome!r}")
            ordered[pair] = outcome
        object.__setattr__(self, "results", MappingProxyType(ordered))

    @property
    def players(self) -> Tuple[PlayerId, ...]:
        return tuple(sorted({player for pair in self.results for player in pair}))

    @property
    def decided_pairs(self) -> Tuple[PlayerPair, ...]:
        return tuple(pair for pair, outcome in self.results.items() if isinstance(outcome, Decided))

    @property
    def pending_pairs(self) -> Tuple[PlayerPair, ...]:
        return tuple(pair for pair, outcome in self.results.items() if isinstance(outcome, Pending))

    @property
    def match_count(self) -> int:
        return len(self.results)
