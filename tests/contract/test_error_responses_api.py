"""Contract tests: every demo endpoint's status code and response body."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from src.config import Settings

DEFAULT_MESSAGE = "Oups, Houston, we have a problem"


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
async def client(settings: Settings) -> AsyncClient:
    """Create test client around a freshly built app."""
    from src.main import create_app

    app = create_app(settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c  # type: ignore[misc]


class TestSuccessfulEndpoints:
    """Endpoints that return normally bypass the error translator."""

    @pytest.mark.asyncio
    async def test_hello_returns_plain_text(self, client: AsyncClient) -> None:
        resp = await client.get("/hello")
        assert resp.status_code == 200
        assert resp.text == "Hello you !"
        assert resp.headers["content-type"].startswith("text/plain")

    @pytest.mark.asyncio
    async def test_secret1_is_reachable(self, client: AsyncClient) -> None:
        resp = await client.get("/secret1")
        assert resp.status_code == 200
        assert resp.text == "This is a secret"

    @pytest.mark.asyncio
    async def test_health_endpoint_returns_200(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert "timestamp" in data


class TestErrorEndpoints:
    """Failing endpoints all answer with a JSON ``{"message": ...}`` body."""

    @pytest.mark.asyncio
    async def test_forbidden_returns_403(self, client: AsyncClient) -> None:
        resp = await client.get("/forbidden")
        assert resp.status_code == 403
        assert resp.headers["content-type"] == "application/json"
        assert resp.json() == {"message": "You shall not pass !"}

    @pytest.mark.asyncio
    async def test_secret2_is_blocked_by_gate(self, client: AsyncClient) -> None:
        resp = await client.get("/secret2")
        assert resp.status_code == 401
        assert resp.headers["content-type"] == "application/json"
        assert resp.json() == {"message": "Stop! This access is forbidden"}

    @pytest.mark.asyncio
    async def test_teatime_returns_418(self, client: AsyncClient) -> None:
        resp = await client.get("/teatime")
        assert resp.status_code == 418
        assert resp.json() == {"message": "No more tea"}

    @pytest.mark.asyncio
    async def test_trouble_returns_generic_500(self, client: AsyncClient) -> None:
        resp = await client.get("/trouble")
        assert resp.status_code == 500
        assert resp.json() == {"message": DEFAULT_MESSAGE}
        assert "didn't expect" not in resp.text

    @pytest.mark.asyncio
    async def test_unknown_route_returns_404_json(self, client: AsyncClient) -> None:
        resp = await client.get("/does-not-exist")
        assert resp.status_code == 404
        assert resp.headers["content-type"] == "application/json"
        assert resp.json() == {"message": "Not Found"}

    @pytest.mark.asyncio
    async def test_wrong_method_returns_405_json(self, client: AsyncClient) -> None:
        resp = await client.post("/hello")
        assert resp.status_code == 405
        assert resp.json() == {"message": "Method Not Allowed"}
        assert "GET" in resp.headers["allow"]


class TestLegacyEscaping:
    @pytest.mark.asyncio
    async def test_legacy_body_layout(self) -> None:
        from src.main import create_app

        app = create_app(Settings(_env_file=None, legacy_error_escaping=True))  # type: ignore[call-arg]
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/teatime")

        assert resp.status_code == 418
        assert resp.text == '{\n    "message": "No more tea"\n}'
