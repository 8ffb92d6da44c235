from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from groupties.models import MatchRecord
from groupties.standings import Classification


class ClassifyRequest(BaseModel):
    records: List[MatchRecord] = Field(default_factory=list)
    player_names: Dict[str, str] = Field(default_factory=dict)


class GroupClassificationResponse(BaseModel):
    group_id: str
    classification: Classification
    players: List[str]
    branch_count: int = Field(..., ge=1)
    branches: List[Dict[str, int]]


class ClassifyResponse(BaseModel):
    groups: List[GroupClassificationResponse]
    player_names: Dict[str, str] = Field(default_factory=dict)
