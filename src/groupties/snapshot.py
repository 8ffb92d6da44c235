"""Persist and load feed snapshots so a run can be replayed offline."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from pydantic import ValidationError

from groupties.models import MalformedRecordError, MatchRecord
from groupties.standings import MatchResultStore


class SnapshotError(RuntimeError):
    """Raised when a snapshot file cannot be read as a snapshot."""


@dataclass
class FeedSnapshot:
    event_slug: str
    records: List[MatchRecord] = field(default_factory=list)
    player_names: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "FeedSnapshot":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise SnapshotError(f"cannot read snapshot {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"invalid snapshot JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise SnapshotError(f"snapshot {path} must hold a JSON object")
        records = data.get("records", [])
        names = data.get("player_names", {})
        if not isinstance(records, list) or not isinstance(names, dict):
            raise SnapshotError(f"snapshot {path} needs a records list and a player_names object")

        try:
            parsed = [MatchRecord.model_validate(item) for item in records]
        except ValidationError as exc:
            raise MalformedRecordError(str(exc)) from exc
        return cls(
            event_slug=data.get("event_slug", ""),
            records=parsed,
            player_names={str(key): str(value) for key, value in names.items()},
        )

    def save(self, path: Path) -> None:
        payload = {
            "event_slug": self.event_slug,
            "records": [record.model_dump(exclude_none=True) for record in self.records],
            "player_names": self.player_names,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def ingest_into(self, store: MatchResultStore) -> int:
        for player_id, name in self.player_names.items():
            store.set_player_name(player_id, name)
        return store.add_records(self.records)
