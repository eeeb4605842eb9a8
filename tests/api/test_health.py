"""Health endpoint tests (no auth, no reaper state)."""

from httpx import ASGITransport, AsyncClient

from reaper.main import create_app


async def test_health_returns_ok() -> None:
    """GET /api/v1/health returns 200 with status ok."""
    async with AsyncClient(
        transport=ASGITransport(app=create_app()), base_url="http://test"
    ) as client:
        response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "x-request-id" in response.headers
