"""Tests for the correlation ID middleware."""

import uuid

from fastapi import FastAPI, Request
from starlette.testclient import TestClient
from structlog.contextvars import get_contextvars

from announcer.middleware.correlation import CorrelationMiddleware


def make_client() -> TestClient:
    app = FastAPI()
    app.add_middleware(CorrelationMiddleware)

    @app.get("/echo")
    async def echo(request: Request) -> dict[str, str | None]:
        return {
            "state": request.state.correlation_id,
            "bound": get_contextvars().get("correlation_id"),
        }

    return TestClient(app)


def test_valid_request_id_is_reused() -> None:
    request_id = str(uuid.uuid4())

    response = make_client().get("/echo", headers={"X-Request-ID": request_id})

    assert response.headers["X-Request-ID"] == request_id
    assert response.json() == {"state": request_id, "bound": request_id}


def test_invalid_request_id_is_replaced() -> None:
    response = make_client().get("/echo", headers={"X-Request-ID": "not-a-uuid"})

    generated = response.headers["X-Request-ID"]
    assert generated != "not-a-uuid"
    uuid.UUID(generated)
    assert response.json()["state"] == generated


def test_missing_request_id_is_generated() -> None:
    response = make_client().get("/echo")

    uuid.UUID(response.headers["X-Request-ID"])


def test_context_is_cleared_after_request() -> None:
    make_client().get("/echo")

    assert "correlation_id" not in get_contextvars()
