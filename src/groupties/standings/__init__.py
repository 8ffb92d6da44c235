"""Standings enumeration and three-way tie classification."""

from .classify import (
    Classification,
    ClassificationRun,
    GroupClassification,
    classify,
    classify_group,
    classify_groups,
    has_three_way_tie,
)
from .outcomes import ScoreVector, enumerate_outcomes
from .report import render_group, render_report
from .store import MatchResultStore, group_sort_key

__all__ = [
    "Classification",
    "ClassificationRun",
    "GroupClassification",
    "MatchResultStore",
    "ScoreVector",
    "classify",
    "classify_group",
    "classify_groups",
    "enumerate_outcomes",
    "group_sort_key",
    "has_three_way_tie",
    "render_group",
    "render_report",
]
