"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from rival_snake.records import InMemoryRecordSink, RecordSink
from rival_snake.server.routes import router
from rival_snake.server.session_manager import SessionManager
from rival_snake.server.websocket import ws_router


@asynccontextmanager
async def _lifespan(app: FastAPI):
    yield
    await app.state.session_manager.cleanup()


def create_app(sink: RecordSink | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Without an explicit *sink*, scores are kept in memory for the lifetime
    of the process.
    """
    app = FastAPI(
        title="Rival Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.state.session_manager = SessionManager(
        sink if sink is not None else InMemoryRecordSink(),
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
