"""Tests for health check and metrics endpoints."""

import pytest
from httpx import AsyncClient

from googlelogin.utils.metrics import metrics


class TestHealthCheck:
    """Tests for /health endpoint."""

    @pytest.mark.asyncio
    async def test_health_endpoint_exists(self, client: AsyncClient):
        """Test that health endpoint returns a response."""
        response = await client.get("/health")
        assert response.status_code in [200, 503]

    @pytest.mark.asyncio
    async def test_health_response_structure(self, client: AsyncClient):
        """Test health response has correct structure."""
        data = (await client.get("/health")).json()

        assert "status" in data
        assert "timestamp" in data
        assert "uptime_seconds" in data
        assert "version" in data
        assert "checks" in data

    @pytest.mark.asyncio
    async def test_health_checks(self, client: AsyncClient):
        """Database is reachable, Redis is switched off in tests."""
        data = (await client.get("/health")).json()

        checks = data["checks"]
        assert checks["database"]["status"] == "healthy"
        assert checks["redis"]["status"] == "disabled"
        assert checks["google_oauth"]["status"] == "configured"
        assert data["status"] == "healthy"


class TestMetrics:
    """Tests for /metrics endpoint."""

    @pytest.mark.asyncio
    async def test_metrics_after_login(self, signed_in_client: AsyncClient):
        response = await signed_in_client.get("/metrics")
        assert response.status_code == 200

        body = response.text
        assert "# TYPE http_requests_total counter" in body
        assert 'oauth_logins_total{result="success"}' in body
        assert "http_request_duration_seconds_bucket" in body

    @pytest.mark.asyncio
    async def test_unknown_paths_share_one_series(self, client: AsyncClient):
        """404 scans must not add one series per URL."""
        await client.get("/nope/warmup")
        before = len(metrics.http_requests_total._values)

        for i in range(50):
            response = await client.get(f"/nope/{i}")
            assert response.status_code == 404

        assert len(metrics.http_requests_total._values) == before
        body = (await client.get("/metrics")).text
        assert "/nope/" not in body
        assert 'path="unmatched",status="404"' in body

    @pytest.mark.asyncio
    async def test_routes_labelled_by_template(self, client: AsyncClient):
        await client.get("/api/auth/status")
        assert metrics.http_requests_total.get(method="GET", path="/api/auth/status", status="200") >= 1
