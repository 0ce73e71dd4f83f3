"""FastAPI entry-point exposing the executive orchestrator."""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from boardroom.api.context import router as context_router
from boardroom.api.decisions import router as decisions_router
from boardroom.api.routes import router as messages_router
from boardroom.orchestration.orchestrator import ExecutiveOrchestrator
from boardroom.runtime import get_orchestrator


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI application."""
    # Startup: build the orchestrator and register the executives
    get_orchestrator()
    yield
    # Shutdown: drop whatever is still queued
    get_orchestrator().clear_all_history()


app = FastAPI(title="Boardroom Orchestrator", lifespan=lifespan)
app.include_router(messages_router)
app.include_router(decisions_router)
app.include_router(context_router)


@app.get("/health")
async def health(orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator)) -> dict:
    return {
        "status": "ok",
        "executives": len(orchestrator.registry),
        "pending": orchestrator.pending_count,
    }
