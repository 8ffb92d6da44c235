"""Enumerate every final win-count assignment a group can still reach."""

from __future__ import annotations

import logging
from typing import Dict, List

from groupties.models import Decided, GroupRecord, PlayerId


logger = logging.getLogger(__name__)

ScoreVector = Dict[PlayerId, int]


def enumerate_outcomes(record: GroupRecord) -> List[ScoreVector]:
    """Return one score vector per way of resolving the group's pending matches.

    Decided matches add a win to every branch. Each pending match doubles the
    branch list: the existing branches credit the pair's first player and the
    appended copies credit the second one. Duplicate vectors are kept, so a
    group with ``k`` pending matches always yields ``2 ** k`` entries.
    """

    players = record.players
    slots = {player: position for position, player in enumerate(players)}
    branches: List[List[int]] = [[0] * len(players)]

    for pair, outcome in record.results.items():
        if isinstance(outcome, Decided):
            winner = slots[outcome.winner]
            for scores in branches:
                scores[winner] += 1
            continue
        first, second = slots[pair.first], slots[pair.second]
        alternates = [list(scores) for scores in branches]
        for scores in branches:
            scores[first] += 1
        for scores in alternates:
            scores[second] += 1
        branches.extend(alternates)

    logger.debug(
        "group %s: %s players, %s pending matches, %s branches",
        record.group_id,
        len(players),
        len(record.pending_pairs),
        len(branches),
    )
    return [dict(zip(players, scores)) for scores in branches]
