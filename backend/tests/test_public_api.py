"""
Project Canvas Backend - Public API Tests
==========================================

What we test:
    ✅ Empty store returns the default canvas and settings
    ✅ Only enabled hotspots are served, without an `enabled` key
    ✅ Ordering by sequence, ties broken by id
    ✅ Integral coordinates come back as JSON integers
    ✅ Health endpoint reports version and database state
    ✅ Errors carry the request id
"""

import pytest

from canvas_journal import __version__


async def _bulk(client, admin_headers, document):
    response = await client.post("/api/admin/bulk", json=document, headers=admin_headers)
    assert response.status_code == 200, response.text
    return response


class TestCanvasEndpoint:
    """Tests for GET /api/canvas."""

    @pytest.mark.asyncio
    async def test_empty_store_returns_defaults(self, client):
        """An empty store serves the default canvas and zoom."""
        response = await client.get("/api/canvas")

        assert response.status_code == 200
        assert response.json() == {
            "canvas": {"width": 1376, "height": 768},
            "settings": {"zoomOnClick": 1.5, "minZoom": 0.5, "maxZoom": 3},
            "hotspots": [],
        }

    @pytest.mark.asyncio
    async def test_serves_enabled_hotspots_only(self, client, admin_headers, sample_document):
        """Disabled hotspots are left out."""
        await _bulk(client, admin_headers, sample_document)

        body = (await client.get("/api/canvas")).json()

        assert [h["id"] for h in body["hotspots"]] == ["a", "b", "c"]
        assert all("enabled" not in h for h in body["hotspots"])
        assert body["canvas"] == {"width": 2000, "height": 1000}
        assert body["settings"] == {"zoomOnClick": 2, "minZoom": 0.25, "maxZoom": 4}

    @pytest.mark.asyncio
    async def test_hotspot_shape_and_defaults(self, client, admin_headers, sample_document):
        """Entries have region and content objects and no enabled key."""
        await _bulk(client, admin_headers, sample_document)

        hotspots = (await client.get("/api/canvas")).json()["hotspots"]
        alpha, _, gamma = hotspots

        assert alpha == {
            "id": "a",
            "name": "Alpha",
            "type": "text",
            "region": {"x": 10, "y": 20, "width": 100, "height": 50},
            "content": {"title": "Alpha title", "description": "First", "image": "", "video": ""},
            "sequence": 1,
        }
        assert isinstance(alpha["region"]["x"], int)
        assert gamma["region"]["x"] == 400.5
        assert gamma["type"] == "video"
        assert gamma["content"]["description"] == ""

    @pytest.mark.asyncio
    async def test_sequence_ties_ordered_by_id(self, client, admin_headers):
        """Equal sequence values are ordered by id."""
        region = {"x": 0, "y": 0, "width": 10, "height": 10}
        await _bulk(client, admin_headers, {
            "hotspots": [
                {"id": "z", "name": "Z", "region": region, "content": {}, "sequence": 1},
                {"id": "m", "name": "M", "region": region, "content": {}, "sequence": 2},
                {"id": "k", "name": "K", "region": region, "content": {}, "sequence": 1},
            ]
        })

        ids = [h["id"] for h in (await client.get("/api/canvas")).json()["hotspots"]]

        assert ids == ["k", "z", "m"]

    @pytest.mark.asyncio
    async def test_partial_settings_fall_back_per_field(self, client, admin_headers):
        """Each missing settings column falls back on its own."""
        await _bulk(client, admin_headers, {"settings": {"zoomOnClick": 2.5}})

        settings = (await client.get("/api/canvas")).json()["settings"]

        assert settings == {"zoomOnClick": 2.5, "minZoom": 0.5, "maxZoom": 3}

    @pytest.mark.asyncio
    async def test_response_carries_request_id(self, client):
        """X-Request-ID is echoed on the response."""
        response = await client.get("/api/canvas", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"


class TestHealthEndpoint:
    """Tests for GET /health."""

    @pytest.mark.asyncio
    async def test_health_reports_connected_database(self, client):
        """Health reports ok with a reachable database."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "version": __version__,
            "database": "connected",
        }

    @pytest.mark.asyncio
    async def test_unknown_route_is_404(self, client):
        """Unknown paths are 404."""
        response = await client.get("/api/nothing-here")

        assert response.status_code == 404
