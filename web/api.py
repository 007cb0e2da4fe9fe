"""FastAPI web application for the AI Debate Arena."""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import AppConfig, get_default_config
from debate_engine.database import DatabaseManager
from debate_engine.exceptions import EngineStateError, SessionNotFoundError
from debate_engine.store import SQLiteDebateStore
from models.manager import ModelManager
from web.broadcaster import DebateBroadcaster
from web.debate_manager import DebateManager
from web.endpoints.debates import router as debates_router, ws_router as debates_ws_router
from web.endpoints.participants import router as participants_router
from web.endpoints.system import router as system_router
from web.endpoints.transcripts import router as transcripts_router

logger: logging.Logger = logging.getLogger(__name__)


def get_allowed_origins() -> list[str] | None:
    """Get CORS origins from environment or use development defaults."""
    env_origins: str | None = os.environ.get("ALLOWED_ORIGINS")
    if env_origins:
        origins = [origin.strip() for origin in env_origins.split(",")]
        return origins
    return None


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the application; the config is loaded at startup when not given."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Manage application lifespan - startup and shutdown."""
        app_config = config or get_default_config()

        db_manager = DatabaseManager(app_config.system.database_path)
        store = SQLiteDebateStore(db_manager, app_config.api_configs)
        model_manager = ModelManager(app_config.system)
        debate_manager = DebateManager(app_config, store, model_manager, DebateBroadcaster())

        app.state.config = app_config
        app.state.debate_manager = debate_manager
        logger.info(
            f"Debate arena started with database {app_config.system.database_path} "
            f"and {len(app_config.api_configs)} API configs"
        )

        yield

        await debate_manager.shutdown()
        await model_manager.aclose()
        logger.info("Debate arena stopped")

    app = FastAPI(
        title="AI Debate Arena",
        description="Multi-round debates between AI agents, scored by AI judges",
        version="1.0.0",
        lifespan=lifespan,
    )

    allowed_origins = get_allowed_origins()
    if allowed_origins:
        logger.info(f"Setting CORS allowed origins: {allowed_origins}")
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        # Development: Allow any localhost/127.0.0.1
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(EngineStateError)
    async def engine_state_error_handler(_: Request, exc: EngineStateError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found_handler(_: Request, exc: SessionNotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    app.include_router(system_router)
    app.include_router(participants_router)
    app.include_router(debates_router)
    app.include_router(transcripts_router)
    app.include_router(debates_ws_router)

    return app


app: FastAPI = create_app()
