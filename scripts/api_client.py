"""Lightweight REST client for the groupties API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_snapshot(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid snapshot JSON: {exc}") from exc
    return {
        "records": data.get("records", []),
        "player_names": data.get("player_names", {}),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the groupties REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("snapshot", type=Path, help="Snapshot JSON written by `groupties --save-snapshot`")
    parser.add_argument("--json", action="store_true", help="Print the structured classification instead of the text report")
    args = parser.parse_args()

    payload = load_snapshot(args.snapshot)

    with httpx.Client(base_url=args.base_url) as client:
        if args.json:
            resp = client.post("/classify", json=payload)
        else:
            resp = client.post("/classify/report", json=payload)
        if resp.status_code == 422:
            raise SystemExit(f"request rejected: {resp.text}")
        resp.raise_for_status()
        if args.json:
            print(json.dumps(resp.json(), indent=2))
        else:
            print(resp.text)


if __name__ == "__main__":
    main()
