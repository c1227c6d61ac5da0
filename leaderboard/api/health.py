"""
Health check endpoint
"""
from fastapi import APIRouter, Request

from leaderboard.config import VERSION


router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    return {
        "status": "ok",
        "version": VERSION,
        "teams": len(request.app.state.store),
        "phase": request.app.state.coordinator.phase.value,
    }
