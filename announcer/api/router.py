"""Reconcile webhook and probe routes."""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from announcer.core.events import AppState
from announcer.core.logging import get_request_logger
from announcer.reconciler.runner import run_reconciliation

router = APIRouter(default_response_class=JSONResponse)


def get_app_state(request: Request) -> AppState:
    """Get the process-wide state created at startup."""
    state: AppState | None = getattr(request.app.state, "runtime", None)
    if state is None:
        raise RuntimeError("Application state accessed before startup")
    return state


@router.post("/reconcile")
async def reconcile(request: Request) -> dict[str, Any]:
    """
    Run one reconciliation pass over the feed.

    Feed fetch and parse failures surface as 5xx through the error
    middleware; failures on single entries are only logged.
    """
    state = get_app_state(request)
    logger = get_request_logger(getattr(request.state, "correlation_id", None))
    logger.info("time_to_check_the_log")

    report = await run_reconciliation(
        state.config,
        state.client,
        memory_store=state.memory_store,
        store_factory=state.store_factory,
    )
    return {"status": "ok", "mode": state.config.mode.value, **report.to_dict()}


@router.get("/isalive", response_class=PlainTextResponse)
async def is_alive() -> str:
    """Liveness probe."""
    return "ok"


@router.get("/isready", response_class=PlainTextResponse)
async def is_ready() -> str:
    """Readiness probe."""
    return "ok"
