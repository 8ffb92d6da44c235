"""Plain-text rendering of tie classifications."""

from __future__ import annotations

from typing import List, Mapping

from groupties.models import PlayerId

from .classify import Classification, ClassificationRun, GroupClassification


_HEADLINES = {
    Classification.GUARANTEED: "3-way tie guaranteed, possible scores:",
    Classification.POSSIBLE: "3-way tie possible, possible scores:",
    Classification.IMPOSSIBLE: "3-way tie impossible",
}


def render_group(result: GroupClassification, names: Mapping[PlayerId, str]) -> List[str]:
    lines = [f"group {result.group_id}: {_HEADLINES[result.classification]}"]
    for vector in result.reported_vectors:
        lines.append(
            ", ".join(f"{names.get(player, player)}: {vector[player]}" for player in result.players)
        )
    return lines


def render_report(run: ClassificationRun, names: Mapping[PlayerId, str]) -> str:
    """Render every group, each block preceded by a blank line."""

    blocks: List[str] = []
    for result in run.groups:
        blocks.append("\n" + "\n".join(render_group(result, names)))
    for group_id, message in run.failures.items():
        blocks.append(f"\ngroup {group_id}: skipped, malformed results ({message})")
    return "\n".join(blocks)
