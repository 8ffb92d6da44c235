"""Three-way tie classification over a group's enumerated branches."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Sequence, Tuple

from groupties.models import GroupRecord, MalformedRecordError, PlayerId

from .outcomes import ScoreVector, enumerate_outcomes
from .store import MatchResultStore


logger = logging.getLogger(__name__)


class Classification(str, Enum):
    GUARANTEED = "GUARANTEED"
    POSSIBLE = "POSSIBLE"
    IMPOSSIBLE = "IMPOSSIBLE"


def has_three_way_tie(vector: Mapping[PlayerId, int], player_count: int) -> bool:
    """True when some win count in ``0..player_count-1`` is held by exactly three players."""

    holders = Counter(vector.values())
    return any(holders.get(score, 0) == 3 for score in range(player_count))


def classify(vectors: Sequence[Mapping[PlayerId, int]], player_count: int) -> Classification:
    if not vectors:
        raise ValueError("cannot classify a group without any branches")

    tie_seen = False
    non_tie_seen = False
    for vector in vectors:
        if has_three_way_tie(vector, player_count):
            tie_seen = True
        else:
            non_tie_seen = True
        if tie_seen and non_tie_seen:
            return Classification.POSSIBLE
    return Classification.GUARANTEED if tie_seen else Classification.IMPOSSIBLE


@dataclass(frozen=True)
class GroupClassification:
    """Classification of one group plus the branches that produced it."""

    group_id: str
    classification: Classification
    players: Tuple[PlayerId, ...]
    vectors: Tuple[ScoreVector, ...]

    @property
    def branch_count(self) -> int:
        return len(self.vectors)

    @property
    def reported_vectors(self) -> Tuple[ScoreVector, ...]:
        if self.classification is Classification.IMPOSSIBLE:
            return ()
        return self.vectors


@dataclass(frozen=True)
class ClassificationRun:
    """Results for every group of a run, with isolated failures kept apart."""

    groups: List[GroupClassification]
    failures: Dict[str, str] = field(default_factory=dict)


def classify_group(record: GroupRecord) -> GroupClassification:
    vectors = enumerate_outcomes(record)
    players = record.players
    result = classify(vectors, len(players))
    logger.info("group %s: %s over %s branches", record.group_id, result.value, len(vectors))
    return GroupClassification(
        group_id=record.group_id,
        classification=result,
        players=players,
        vectors=tuple(vectors),
    )


def classify_groups(store: MatchResultStore, *, isolate_failures: bool = False) -> ClassificationRun:
    """Finalize and classify every group in the store.

    A malformed group aborts the whole run unless ``isolate_failures`` is set,
    in which case it is logged, recorded in ``failures`` and skipped.
    """

    groups: List[GroupClassification] = []
    failures: Dict[str, str] = {}
    for group_id in store.group_ids():
        try:
            groups.append(classify_group(store.finalize(group_id)))
        except MalformedRecordError as exc:
            if not isolate_failures:
                raise
            logger.warning("Skipping group %s: %s", group_id, exc)
            failures[group_id] = str(exc)
    return ClassificationRun(groups=groups, failures=failures)
