"""REST API for three-way tie classification."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from groupties.api.schemas import ClassifyRequest, ClassifyResponse, GroupClassificationResponse
from groupties.standings import GroupClassification, MatchResultStore, classify_groups, render_report


def _build_store(payload: ClassifyRequest) -> MatchResultStore:
    store = MatchResultStore()
    for player_id, name in payload.player_names.items():
        store.set_player_name(player_id, name)
    store.add_records(payload.records)
    return store


def _group_to_response(result: GroupClassification) -> GroupClassificationResponse:
    return GroupClassificationResponse(
        group_id=result.group_id,
        classification=result.classification,
        players=list(result.players),
        branch_count=result.branch_count,
        branches=[dict(vector) for vector in result.reported_vectors],
    )


def create_app() -> FastAPI:
    app = FastAPI(title="groupties")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/classify", response_model=ClassifyResponse)
    async def classify_endpoint(payload: ClassifyRequest) -> ClassifyResponse:
        store = _build_store(payload)
        run = classify_groups(store)
        return ClassifyResponse(
            groups=[_group_to_response(result) for result in run.groups],
            player_names=dict(store.player_names),
        )

    @app.post("/classify/report", response_class=PlainTextResponse)
    async def classify_report(payload: ClassifyRequest) -> str:
        store = _build_store(payload)
        return render_report(classify_groups(store), store.player_names)

    return app
