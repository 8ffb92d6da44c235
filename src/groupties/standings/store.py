"""Accumulate match results per group while a feed is being paged through."""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from groupties.models import GroupRecord, MatchOutcome, MatchRecord, PlayerId, PlayerPair


logger = logging.getLogger(__name__)

_NUMERIC_GROUP = re.compile(r"^\d+$")


def group_sort_key(group_id: str) -> Tuple[int, int, str]:
    """Order numeric group identifiers numerically, ahead of textual ones."""

    if _NUMERIC_GROUP.match(group_id):
        return (0, int(group_id), group_id)
    return (1, 0, group_id)


class MatchResultStore:
    """Mutable builder for per-group results, finalized into ``GroupRecord`` objects.

    Re-ingesting a pair already seen in a group overwrites the earlier outcome,
    so the same match showing up on two feed pages is harmless.
    """

    def __init__(self) -> None:
        self._groups: Dict[str, Dict[PlayerPair, MatchOutcome]] = {}
        self._finalized: Dict[str, GroupRecord] = {}
        self._player_names: Dict[PlayerId, str] = {}

    def ingest(self, group_id: str, pair: PlayerPair, outcome: MatchOutcome) -> None:
        if group_id in self._finalized:
            raise RuntimeError(f"group {group_id} was already finalized")
        results = self._groups.setdefault(group_id, {})
        if pair in results and results[pair] != outcome:
            logger.debug("group %s: replacing %s with %s for %s", group_id, results[pair], outcome, pair)
        results[pair] = outcome

    def add_record(self, record: MatchRecord) -> None:
        if record.player_a_name is not None:
            self.set_player_name(record.player_a, record.player_a_name)
        if record.player_b_name is not None:
            self.set_player_name(record.player_b, record.player_b_name)
        self.ingest(record.group_id, record.pair, record.outcome)

    def add_records(self, records: Iterable[MatchRecord]) -> int:
        count = 0
        for record in records:
            self.add_record(record)
            count += 1
        return count

    def set_player_name(self, player_id: PlayerId, name: str) -> None:
        self._player_names[player_id] = name

    def player_name(self, player_id: PlayerId) -> str:
        return self._player_names.get(player_id, player_id)

    @property
    def player_names(self) -> Mapping[PlayerId, str]:
        return MappingProxyType(self._player_names)

    def group_ids(self) -> List[str]:
        return sorted(set(self._groups) | set(self._finalized), key=group_sort_key)

    def finalize(self, group_id: str) -> GroupRecord:
        """Freeze a group; call only once every feed page has been ingested."""

        if group_id in self._finalized:
            return self._finalized[group_id]
        record = GroupRecord(group_id=group_id, results=self._groups.get(group_id, {}))
        self._groups.pop(group_id, None)
        self._finalized[group_id] = record
        return record
