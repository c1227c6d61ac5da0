"""
Score submission and leaderboard endpoints
"""
from typing import Optional

from fastapi import APIRouter, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse

from leaderboard.errors import NotFound
from leaderboard.models import ScorePost
from leaderboard.services.board import board_data, render_html


router = APIRouter(tags=["scores"])


def _wants_html(request: Request, fmt: Optional[str]) -> bool:
    if fmt:
        return fmt.lower() == "html"
    return "text/html" in request.headers.get("accept", "")


@router.post("/", status_code=201)
async def post_score(score: ScorePost, request: Request):
    """
    Submit a score observation

    Request:
        {"team": "red", "score": 12.5, "time": "2024-05-01T08:00:00Z", "secret": "..."}

    Response:
        201 with an empty body, or {"msg": ..., "ver": ...} with 401/409
    """
    gate = request.app.state.gate
    gate.submit(score.team, score.score, score.time, score.secret)
    return Response(status_code=201)


@router.get("/")
async def get_board(request: Request, format: Optional[str] = None, history: bool = True):
    """Current leaderboard, best first, as JSON or HTML"""
    snapshot = request.app.state.store.snapshot()
    meta = request.app.state.settings.meta

    if _wants_html(request, format):
        return HTMLResponse(content=render_html(snapshot, meta))
    return JSONResponse(content=board_data(snapshot, meta, include_history=history))


@router.get("/teams/{team}")
async def get_team(team: str, request: Request):
    """Best record and full history for one team"""
    store = request.app.state.store
    best = store.get(team)
    if best is None:
        raise NotFound(f"team {team} has no records")
    return {
        "team": team,
        "best": best.model_dump(mode="json"),
        "history": [record.model_dump(mode="json") for record in store.history_of(team)],
    }
