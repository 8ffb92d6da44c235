import json
from pathlib import Path

import pytest

from groupties import cli
from groupties.ingest import FeedHTTPError
from groupties.models import MatchRecord
from groupties.snapshot import FeedSnapshot


def _write_snapshot(path: Path) -> Path:
    FeedSnapshot(
        event_slug="tournament/t/event/e",
        records=[
            MatchRecord.decided("1", "a", "b", player_a_name="Ann", player_b_name="Ben"),
            MatchRecord.decided("1", "a", "c", player_b_name="Cat"),
            MatchRecord.from_placements("1", "b", "c", 1, 1),
        ],
    ).save(path)
    return path


def test_cli_reports_from_snapshot(tmp_path: Path, capsys):
    path = _write_snapshot(tmp_path / "snapshot.json")

    assert cli.main(["--snapshot", str(path)]) == 0

    out = capsys.readouterr().out
    assert out == "\ngroup 1: 3-way tie impossible\n"


def test_cli_saves_fetched_records(tmp_path: Path, monkeypatch, capsys):
    records = [MatchRecord.from_placements("4", "p", "q", 2, 2, player_a_name="Pat", player_b_name="Quinn")]

    class FakeFeed:
        def __init__(self, api_key, event_slug, *, settings=None):
            assert api_key == "secret"
            self.event_slug = event_slug

        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            return None

        def ingest_into(self, store):
            store.add_records(records)
            return list(records)

    monkeypatch.setattr(cli, "StartGGFeed", FakeFeed)
    target = tmp_path / "saved.json"

    assert cli.main(["tournament/t/event/e", "--api-key", "secret", "--save-snapshot", str(target)]) == 0

    saved = FeedSnapshot.load(target)
    assert saved.records == records
    assert saved.player_names == {"p": "Pat", "q": "Quinn"}
    assert "group 4: 3-way tie impossible" in capsys.readouterr().out


def test_cli_reports_feed_failures(monkeypatch, capsys):
    class BrokenFeed:
        def __init__(self, *args, **kwargs):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            return None

        def ingest_into(self, store):
            raise FeedHTTPError("page 1 returned HTTP 500")

    monkeypatch.setattr(cli, "StartGGFeed", BrokenFeed)

    assert cli.main(["tournament/t/event/e", "--api-key", "secret"]) == 1
    assert "HTTP 500" in capsys.readouterr().err


def test_cli_requires_event_or_snapshot(monkeypatch):
    monkeypatch.delenv("STARTGG_API_KEY", raising=False)

    with pytest.raises(SystemExit):
        cli.main([])
    with pytest.raises(SystemExit):
        cli.main(["tournament/t/event/e"])


def test_cli_reports_malformed_snapshot_records(tmp_path: Path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(
        json.dumps({"event_slug": "e", "records": [{"group_id": "1", "player_a": "a", "player_b": "a"}]}),
        encoding="utf-8",
    )

    assert cli.main(["--snapshot", str(path)]) == 2
    err = capsys.readouterr().err
    assert "error: malformed results" in err
    assert "cannot play themselves" in err


@pytest.mark.parametrize("content", [None, "{not json", "[1, 2]", '{"records": {}}'])
def test_cli_rejects_unreadable_snapshots(tmp_path: Path, content):
    path = tmp_path / "snapshot.json"
    if content is not None:
        path.write_text(content, encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--snapshot", str(path)])

    assert "snapshot" in str(excinfo.value.code)
