"""API tests for health endpoints."""

from httpx import AsyncClient


class TestHealthAPI:
    async def test_health(self, client: AsyncClient):
        response = await client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["open_drafts"] == 0

    async def test_health_counts_open_drafts(self, client: AsyncClient):
        await client.post("/api/invoice-drafts")
        data = (await client.get("/api/health")).json()
        assert data["open_drafts"] == 1

    async def test_request_id_header(self, client: AsyncClient):
        response = await client.get("/api/health")
        assert "X-Request-ID" in response.headers
