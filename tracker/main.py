"""
tracker/main.py

FastAPI application entry point for the Trail Guardian tracker.
Starts the simulated session and its scheduler for the app lifetime.
"""

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI

from tracker.context import build_context
from tracker.routers.session import router as session_router
from tracker.session import start_session, stop_session

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle: startup and shutdown."""
    ctx = build_context()
    start_session(ctx)
    app.state.session = ctx
    runner = asyncio.create_task(ctx.scheduler.run())
    logger.info("tracker_starting")
    yield
    logger.info("tracker_shutting_down")
    stop_session(ctx)
    runner.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await runner


app = FastAPI(
    title="Trail Guardian",
    description="Simulated hiking safety tracker with risk assessment and SOS",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(session_router)
