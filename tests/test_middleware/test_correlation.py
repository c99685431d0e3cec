"""Tests for correlation ID middleware."""

import uuid
from typing import cast

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient
from starlette.types import ASGIApp
from structlog.contextvars import get_contextvars

from pawprice.middleware.correlation import (
    REQUEST_ID_HEADER,
    CorrelationMiddleware,
    is_valid_correlation_id,
)


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(CorrelationMiddleware)

    @app.get("/echo")
    async def echo(request: Request) -> dict[str, str | None]:
        return {
            "state": request.state.correlation_id,
            "context": get_contextvars().get("correlation_id"),
        }

    return app


@pytest.mark.parametrize(
    "value, expected",
    [
        (str(uuid.uuid4()), True),
        ("test-abc", True),
        ("not-a-uuid", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_correlation_id(value: str | None, expected: bool) -> None:
    assert is_valid_correlation_id(value) is expected


@pytest.mark.asyncio
async def test_incoming_id_is_kept(app: FastAPI) -> None:
    request_id = str(uuid.uuid4())
    transport = ASGITransport(app=cast(ASGIApp, app))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/echo", headers={REQUEST_ID_HEADER: request_id})

    assert response.headers[REQUEST_ID_HEADER] == request_id
    assert response.json() == {"state": request_id, "context": request_id}


@pytest.mark.asyncio
async def test_invalid_id_is_replaced(app: FastAPI) -> None:
    transport = ASGITransport(app=cast(ASGIApp, app))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/echo", headers={REQUEST_ID_HEADER: "<script>"})

    generated = response.headers[REQUEST_ID_HEADER]
    assert generated != "<script>"
    assert uuid.UUID(generated)
    assert response.json()["state"] == generated
