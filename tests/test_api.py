"""Tests for API endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from shortener.errors import StoreConflictError, StoreUnavailableError
from shortener.service import URLShortenerService
from web_app import create_app


@pytest.mark.asyncio
class TestAPIEndpoints:
    """Test API endpoints."""

    async def test_shorten_url(self, client, sample_urls):
        response = await client.post("/api/shorten", json={"url": sample_urls[0]})

        assert response.status_code == 200
        data = response.json()
        assert data["short_code"] == "1"
        assert data["short_url"] == "http://testserver/1"
        assert data["original_url"] == sample_urls[0]
        assert "created_at" in data

    async def test_shorten_with_path_prefix(self, app, client, sample_urls):
        app.state.config.path_prefix = "/s"
        response = await client.post("/api/shorten", json={"url": sample_urls[0]})

        assert response.json()["short_url"] == "http://testserver/s/1"

    async def test_shorten_empty_url(self, client, store):
        response = await client.post("/api/shorten", json={"url": ""})

        assert response.status_code == 400
        assert sum(store.calls.values()) == 0

    async def test_shorten_missing_url(self, client):
        response = await client.post("/api/shorten", json={})
        assert response.status_code == 422

    async def test_redirect(self, client, sample_urls):
        create = await client.post("/api/shorten", json={"url": sample_urls[0]})
        short_code = create.json()["short_code"]

        response = await client.get(f"/{short_code}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == sample_urls[0]
        assert response.headers["cache-control"] == "no-cache"

    async def test_redirect_not_found(self, client):
        response = await client.get("/doesnotexist", follow_redirects=False)

        assert response.status_code == 404
        assert response.json() == {"detail": "URL not found"}

    async def test_get_url_info(self, client, sample_urls):
        create = await client.post("/api/shorten", json={"url": sample_urls[0]})
        short_code = create.json()["short_code"]

        response = await client.get(f"/api/urls/{short_code}")

        assert response.status_code == 200
        data = response.json()
        assert data["short_code"] == short_code
        assert data["original_url"] == sample_urls[0]

    async def test_get_url_info_not_found(self, client):
        response = await client.get("/api/urls/nonexistent")
        assert response.status_code == 404

    async def test_get_url_info_blank_code(self, client, store):
        response = await client.get("/api/urls/%20")

        assert response.status_code == 404
        assert store.calls["get"] == 0

    async def test_health_check(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert data["cache"] == "healthy"

    async def test_statistics(self, client, sample_urls):
        await client.post("/api/shorten", json={"url": sample_urls[0]})

        response = await client.get("/api/stats")

        assert response.status_code == 200
        assert response.json() == {"codes_allocated": 1, "cache_enabled": True}


@pytest.mark.asyncio
class TestAPIErrorMapping:
    """Store failures map to distinct HTTP statuses."""

    @staticmethod
    def _client(service, config, logger):
        app = create_app(service_instance=service, config=config, logger=logger)
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")

    async def test_store_unavailable(self, store, config, logger):
        class DownStore(type(store)):
            async def get(self, table, key):
                raise StoreUnavailableError("connection refused")

            async def atomic_increment(self, table, counter_key, field, delta=1):
                raise StoreUnavailableError("connection refused")

        service = URLShortenerService(store=DownStore(logger=logger), logger=logger)

        async with self._client(service, config, logger) as client:
            shorten = await client.post("/api/shorten", json={"url": "https://example.com"})
            redirect = await client.get("/abc", follow_redirects=False)

        assert shorten.status_code == 503
        assert redirect.status_code == 503

    async def test_conflict(self, store, config, logger):
        class ConflictStore(type(store)):
            async def put(self, table, key, record, insert_only=True):
                raise StoreConflictError(table, key)

        service = URLShortenerService(store=ConflictStore(logger=logger), logger=logger)

        async with self._client(service, config, logger) as client:
            response = await client.post("/api/shorten", json={"url": "https://example.com"})

        assert response.status_code == 409
