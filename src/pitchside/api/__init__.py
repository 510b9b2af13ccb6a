"""REST API for the pitchside lineup editor."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Header, HTTPException, Query
from fastapi.responses import Response

from pitchside.api.schemas import (
    AssignmentResponse,
    AssignRequest,
    BenchRequest,
    CandidatesResponse,
    LineupViewResponse,
    PlayerResponse,
    PositionResponse,
    RosterLoadResponse,
    RosterRequest,
    RosterResponse,
)
from pitchside.config.positions import get_position, iter_positions
from pitchside.config.roles import ViewerCapabilities, default_role, parse_role
from pitchside.ingest import RosterRow, demo_roster, normalize_roster, rows_to_roster
from pitchside.lineup import AssignmentResult, LineupExportError, LineupSession, export_lineup_to_csv
from pitchside.persistence import LineupSaveError, LineupStore


logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path("data") / "pitchside.sqlite"


def _viewer(role_header: str | None) -> ViewerCapabilities:
    role = parse_role(role_header, default=default_role())
    return ViewerCapabilities.for_role(role)


def _view_response(session: LineupSession) -> LineupViewResponse:
    return LineupViewResponse.from_view(
        session.view(),
        fixture_id=session.fixture_id,
        can_edit=session.capabilities.can_edit_lineup,
        has_changes=session.has_changes,
    )


def create_app(store: LineupStore | None = None) -> FastAPI:
    app = FastAPI(title="pitchside", version="0.1.0")
    app.state.lineup_store = store or LineupStore(DEFAULT_DB_PATH)
    app.state.sessions = {}

    def _store() -> LineupStore:
        return app.state.lineup_store

    def _session_or_404(fixture_id: str, viewer: ViewerCapabilities) -> LineupSession:
        sessions: dict[str, LineupSession] = app.state.sessions
        session = sessions.get(fixture_id)
        if session is None:
            roster = _store().load_lineup(fixture_id)
            if not roster:
                raise HTTPException(status_code=404, detail="Fixture lineup not found")
            session = LineupSession(fixture_id, roster, viewer)
            sessions[fixture_id] = session
        # Requests are handled one at a time on the event loop, so rebinding is safe.
        session.capabilities = viewer
        return session

    def _apply(session: LineupSession, action, *args) -> AssignmentResult:
        try:
            return action(*args)
        except PermissionError as exc:
            logger.warning("Refused lineup edit on fixture %s: %s", session.fixture_id, exc)
            raise HTTPException(status_code=403, detail="Viewer cannot edit this lineup") from exc

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/positions", response_model=list[PositionResponse])
    async def positions():
        return [PositionResponse.from_position(position) for position in iter_positions()]

    @app.put("/fixtures/{fixture_id}/roster", response_model=RosterResponse)
    async def put_roster(
        fixture_id: str,
        payload: RosterRequest,
        x_viewer_role: str | None = Header(default=None),
    ):
        viewer = _viewer(x_viewer_role)
        if not viewer.can_edit_lineup:
            raise HTTPException(status_code=403, detail="Viewer cannot edit this lineup")
        if payload.use_demo:
            roster, report = normalize_roster(demo_roster())
        else:
            rows = [
                RosterRow(
                    raw_id=item.player_id,
                    raw_name=item.name,
                    raw_number=str(item.number),
                    raw_position=item.position,
                    raw_starter="true" if item.is_starter else "false",
                    raw_preferred=item.preferred_position,
                )
                for item in payload.players
            ]
            try:
                roster, report = rows_to_roster(rows)
            except ValueError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
        _store().save_roster(fixture_id, roster)
        session = LineupSession(fixture_id, roster, viewer)
        app.state.sessions[fixture_id] = session
        return RosterResponse(
            lineup=_view_response(session),
            report=RosterLoadResponse(**report.as_dict()),
        )

    @app.get("/fixtures")
    async def list_fixtures(limit: int = 50):
        return [
            {
                "fixture_id": summary.fixture_id,
                "players": summary.players,
                "starters": summary.starters,
                "updated_at": summary.updated_at.isoformat() if summary.updated_at else None,
            }
            for summary in _store().list_fixtures(limit=limit)
        ]

    @app.delete("/fixtures/{fixture_id}", status_code=204)
    async def delete_fixture(fixture_id: str, x_viewer_role: str | None = Header(default=None)):
        if not _viewer(x_viewer_role).can_edit_lineup:
            raise HTTPException(status_code=403, detail="Viewer cannot edit this lineup")
        cached = app.state.sessions.pop(fixture_id, None)
        if not _store().delete_fixture(fixture_id) and cached is None:
            raise HTTPException(status_code=404, detail="Fixture lineup not found")
        logger.info("Deleted fixture %s", fixture_id)
        return Response(status_code=204)

    @app.get("/fixtures/{fixture_id}/lineup", response_model=LineupViewResponse)
    async def get_lineup(fixture_id: str, x_viewer_role: str | None = Header(default=None)):
        session = _session_or_404(fixture_id, _viewer(x_viewer_role))
        return _view_response(session)

    @app.post("/fixtures/{fixture_id}/lineup/assign", response_model=AssignmentResponse)
    async def assign(
        fixture_id: str,
        payload: AssignRequest,
        x_viewer_role: str | None = Header(default=None),
    ):
        session = _session_or_404(fixture_id, _viewer(x_viewer_role))
        try:
            position = get_position(payload.position)
        except KeyError as exc:
            raise HTTPException(status_code=400, detail=f"Unknown position {payload.position!r}") from exc
        result = _apply(session, session.assign, payload.player_id, position)
        return AssignmentResponse(outcome=result.outcome.value, lineup=_view_response(session))

    @app.post("/fixtures/{fixture_id}/lineup/bench", response_model=AssignmentResponse)
    async def bench(
        fixture_id: str,
        payload: BenchRequest,
        x_viewer_role: str | None = Header(default=None),
    ):
        session = _session_or_404(fixture_id, _viewer(x_viewer_role))
        result = _apply(session, session.bench, payload.player_id)
        return AssignmentResponse(outcome=result.outcome.value, lineup=_view_response(session))

    @app.get("/fixtures/{fixture_id}/lineup/candidates", response_model=CandidatesResponse)
    async def candidates(
        fixture_id: str,
        position: str = Query(...),
        query: str = Query(default=""),
        x_viewer_role: str | None = Header(default=None),
    ):
        session = _session_or_404(fixture_id, _viewer(x_viewer_role))
        try:
            target = get_position(position)
        except KeyError as exc:
            raise HTTPException(status_code=400, detail=f"Unknown position {position!r}") from exc
        groups = session.candidates(target, query)
        return CandidatesResponse(
            position=PositionResponse.from_position(target),
            query=query,
            recommended=[PlayerResponse.from_player(p) for p in groups.recommended],
            others=[PlayerResponse.from_player(p) for p in groups.others],
            message=groups.empty_message(query),
        )

    @app.post("/fixtures/{fixture_id}/lineup/save", response_model=LineupViewResponse)
    async def save(fixture_id: str, x_viewer_role: str | None = Header(default=None)):
        session = _session_or_404(fixture_id, _viewer(x_viewer_role))
        try:
            session.save(_store())
        except PermissionError as exc:
            raise HTTPException(status_code=403, detail="Viewer cannot edit this lineup") from exc
        except LineupSaveError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return _view_response(session)

    @app.post("/fixtures/{fixture_id}/lineup/reset", response_model=LineupViewResponse)
    async def reset(fixture_id: str, x_viewer_role: str | None = Header(default=None)):
        session = _session_or_404(fixture_id, _viewer(x_viewer_role))
        try:
            session.reset()
        except PermissionError as exc:
            raise HTTPException(status_code=403, detail="Viewer cannot edit this lineup") from exc
        return _view_response(session)

    @app.get("/fixtures/{fixture_id}/lineup/export.csv")
    async def export_csv(fixture_id: str, x_viewer_role: str | None = Header(default=None)):
        session = _session_or_404(fixture_id, _viewer(x_viewer_role))
        try:
            content = export_lineup_to_csv(session.roster)
        except LineupExportError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        filename = f"lineup-{fixture_id}.csv"
        return Response(
            content=content,
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app


__all__ = ["create_app"]
