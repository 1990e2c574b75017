import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal.application.use_cases.activity import ActivityFeedReader, ActivityRecorder
from portal.config import get_settings
from portal.infrastructure.database import SessionLocal, engine, initialize_database
from portal.infrastructure.side_effects import SideEffectQueue
from portal.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and the side effect worker; release them on shutdown."""

    initialize_database()
    await app.state.side_effects.start()
    try:
        yield
    finally:
        await app.state.side_effects.stop()
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="Client Portal API", lifespan=lifespan)

    # One recorder, reader and queue per process, shared by every request.
    app.state.activity_recorder = ActivityRecorder(SessionLocal)
    app.state.feed_reader = ActivityFeedReader(SessionLocal)
    app.state.side_effects = SideEffectQueue(
        history_size=settings.side_effect_history_size
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
