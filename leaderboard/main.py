"""
FastAPI application factory
Competition leaderboard server

Routers in leaderboard/api/:
- scores.py: score submission (POST /), leaderboard (GET /), per-team view
- health.py: health check

Components are built once per application from an immutable Settings object
and exposed to the routers through app.state.
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leaderboard.api import health, scores
from leaderboard.config import VERSION
from leaderboard.core.gate import SubmissionGate
from leaderboard.core.persistence import PersistenceController
from leaderboard.core.shutdown import ShutdownCoordinator
from leaderboard.errors import register_error_handlers
from leaderboard.models import Settings


logger = logging.getLogger(__name__)


def create_app(settings: Settings) -> FastAPI:
    """Build the application and load state from the configured data file"""
    persistence = PersistenceController.from_config(settings.store)
    store = persistence.load()
    gate = SubmissionGate(store, settings.store.secret)
    coordinator = ShutdownCoordinator(persistence)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events"""
        coordinator.start()
        logger.info(f"✅ Server started with {len(store)} teams on the board")

        yield

        # In-flight requests have drained by the time the lifespan resumes
        await coordinator.shutdown()

    app = FastAPI(
        title=settings.meta.title,
        description="Competition leaderboard with durable score history",
        version=VERSION,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.store = store
    app.state.gate = gate
    app.state.persistence = persistence
    app.state.coordinator = coordinator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(scores.router)

    return app
