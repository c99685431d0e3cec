"""Tests for the request metrics middleware."""

from typing import cast

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from prometheus_client import REGISTRY
from starlette.types import ASGIApp

from pawprice.middleware.metrics import UNMATCHED_PATH, MetricsMiddleware


def sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(MetricsMiddleware)

    @app.get("/groomers/{groomer_id}")
    async def groomer(groomer_id: str) -> dict[str, str]:
        return {"id": groomer_id}

    return app


@pytest.mark.asyncio
async def test_requests_counted_by_route_template(app: FastAPI) -> None:
    labels = {"method": "GET", "path": "/groomers/{groomer_id}"}
    before = sample("pawprice_http_requests_total", labels)
    ok_before = sample("pawprice_http_responses_total", {"status_code": "200"})

    transport = ASGITransport(app=cast(ASGIApp, app))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await client.get("/groomers/a")
        await client.get("/groomers/b")

    assert sample("pawprice_http_requests_total", labels) == before + 2
    assert (
        sample("pawprice_http_responses_total", {"status_code": "200"})
        == ok_before + 2
    )


@pytest.mark.asyncio
async def test_unknown_paths_share_one_label(app: FastAPI) -> None:
    labels = {"method": "GET", "path": UNMATCHED_PATH}
    before = sample("pawprice_http_requests_total", labels)

    transport = ASGITransport(app=cast(ASGIApp, app))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await client.get("/random/1")
        await client.get("/random/2")

    assert sample("pawprice_http_requests_total", labels) == before + 2
