"""
LinkShelf Backend — API Endpoint Tests
========================================

What:  End-to-end tests of every /api route against a real (in-memory
       SQLite) database.
How:   HTTPX AsyncClient over ASGITransport; the app's session dependency
       is bound to a fresh database per test (see conftest.py).

What we test:
    ✅ Link defaults, tags round-trip and created-descending order
    ✅ Full-overwrite updates, 404s for unknown ids, delete twice
    ✅ 400 for missing fields, 409 for duplicate folders, 500 for storage
       errors and malformed bodies, always as {"error": ...}
    ✅ Health check and request ID header
"""

import pytest


async def create_link(client, **fields):
    body = {"id": "a1", "url": "https://example.com", "created": "2024-01-01"}
    body.update(fields)
    response = await client.post("/api/links", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["timestamp"].endswith("Z")

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/api/health", headers={"X-Request-ID": "trace-42"})
        assert response.headers["X-Request-ID"] == "trace-42"

        response = await test_client.get("/api/links")
        assert len(response.headers["X-Request-ID"]) == 8


class TestLinksCreateAndRead:

    @pytest.mark.asyncio
    async def test_create_minimal_then_get_has_defaults(self, test_client):
        await create_link(test_client, id="A", url="https://u.example", created="T")

        response = await test_client.get("/api/links/A")

        assert response.status_code == 200
        assert response.json() == {
            "id": "A",
            "url": "https://u.example",
            "notes": "",
            "folder": "",
            "tags": [],
            "created": "T",
        }

    @pytest.mark.asyncio
    async def test_create_returns_created_record(self, test_client, sample_link_data):
        response = await test_client.post("/api/links", json=sample_link_data)

        assert response.status_code == 201
        assert response.json() == sample_link_data

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "tags",
        [
            [],
            ["solo"],
            ["zeta", "alpha", "mid"],
            ["dup", "dup"],
            ["with,comma", 'quote"d', "unicode ✓", ""],
        ],
    )
    async def test_tags_round_trip(self, test_client, tags):
        await create_link(test_client, tags=tags)

        single = (await test_client.get("/api/links/a1")).json()
        listed = (await test_client.get("/api/links")).json()

        assert single["tags"] == tags
        assert listed[0]["tags"] == tags

    @pytest.mark.asyncio
    async def test_list_orders_by_created_descending(self, test_client):
        await create_link(test_client, id="jan", created="2024-01-01")
        await create_link(test_client, id="feb", created="2024-02-01")

        response = await test_client.get("/api/links")

        assert response.status_code == 200
        assert [link["created"] for link in response.json()] == ["2024-02-01", "2024-01-01"]

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/api/links")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_get_unknown_link(self, test_client):
        response = await test_client.get("/api/links/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Link not found"}

    @pytest.mark.asyncio
    async def test_create_missing_url_creates_nothing(self, test_client):
        response = await test_client.post(
            "/api/links", json={"id": "a1", "created": "2024-01-01"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}
        assert (await test_client.get("/api/links")).json() == []

    @pytest.mark.asyncio
    async def test_create_without_body(self, test_client):
        response = await test_client.post("/api/links")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    @pytest.mark.asyncio
    async def test_create_duplicate_id_is_internal_error(self, test_client):
        await create_link(test_client, id="dup")

        response = await test_client.post(
            "/api/links", json={"id": "dup", "url": "https://other.example", "created": "2024-05-05"}
        )

        assert response.status_code == 500
        assert "UNIQUE constraint failed" in response.json()["error"]
        links = (await test_client.get("/api/links")).json()
        assert [link["url"] for link in links] == ["https://example.com"]


class TestLinksUpdateAndDelete:

    @pytest.mark.asyncio
    async def test_update_overwrites_all_fields(self, test_client, sample_link_data):
        await test_client.post("/api/links", json=sample_link_data)
        link_id = sample_link_data["id"]

        response = await test_client.put(
            f"/api/links/{link_id}",
            json={"url": "https://new.example", "tags": ["b", "a"]},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Link updated successfully"}

        link = (await test_client.get(f"/api/links/{link_id}")).json()
        assert link["url"] == "https://new.example"
        assert link["notes"] == ""
        assert link["folder"] == ""
        assert link["tags"] == ["b", "a"]
        assert link["created"] == sample_link_data["created"]

    @pytest.mark.asyncio
    async def test_update_ignores_id_and_created(self, test_client):
        await create_link(test_client, id="keep", created="2024-01-01")

        await test_client.put(
            "/api/links/keep",
            json={"id": "other", "created": "2030-01-01", "url": "https://example.com"},
        )

        link = (await test_client.get("/api/links/keep")).json()
        assert link["id"] == "keep"
        assert link["created"] == "2024-01-01"

    @pytest.mark.asyncio
    async def test_update_unknown_link_leaves_store_unchanged(self, test_client):
        await create_link(test_client, notes="original")
        before = (await test_client.get("/api/links")).json()

        response = await test_client.put(
            "/api/links/ghost", json={"url": "https://x.example", "notes": "changed"}
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Link not found"}
        assert (await test_client.get("/api/links")).json() == before

    @pytest.mark.asyncio
    async def test_update_without_url_fails_and_rolls_back(self, test_client):
        """url is NOT NULL, and PUT writes it unconditionally."""
        await create_link(test_client, notes="original")

        response = await test_client.put("/api/links/a1", json={"notes": "changed"})

        assert response.status_code == 500
        assert "NOT NULL" in response.json()["error"]
        link = (await test_client.get("/api/links/a1")).json()
        assert link["notes"] == "original"

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client):
        await create_link(test_client)

        first = await test_client.delete("/api/links/a1")
        second = await test_client.delete("/api/links/a1")

        assert first.status_code == 200
        assert first.json() == {"message": "Link deleted successfully"}
        assert second.status_code == 404
        assert second.json() == {"error": "Link not found"}


class TestFolders:

    @pytest.mark.asyncio
    async def test_create_duplicate_folder(self, test_client):
        first = await test_client.post("/api/folders", json={"name": "Reading"})
        second = await test_client.post("/api/folders", json={"name": "Reading"})

        assert first.status_code == 201
        assert first.json() == {"name": "Reading"}
        assert second.status_code == 409
        assert second.json() == {"error": "Folder already exists"}

    @pytest.mark.asyncio
    async def test_list_folders_sorted(self, test_client):
        for name in ["Python", "Archive", "Music"]:
            await test_client.post("/api/folders", json={"name": name})

        response = await test_client.get("/api/folders")

        assert response.status_code == 200
        assert response.json() == ["Archive", "Music", "Python"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"name": ""}])
    async def test_create_folder_requires_name(self, test_client, body):
        response = await test_client.post("/api/folders", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Folder name is required"}
        assert (await test_client.get("/api/folders")).json() == []

    @pytest.mark.asyncio
    async def test_folder_is_only_a_label(self, test_client):
        """Links may name folders that were never created."""
        await create_link(test_client, folder="Nowhere")

        assert (await test_client.get("/api/links/a1")).json()["folder"] == "Nowhere"
        assert (await test_client.get("/api/folders")).json() == []


class TestMalformedBodies:

    @pytest.mark.asyncio
    async def test_invalid_json(self, test_client):
        response = await test_client.post(
            "/api/links",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        assert "JSON decode error" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_wrongly_typed_field(self, test_client):
        response = await test_client.post(
            "/api/links",
            json={"id": "a1", "url": "https://example.com", "created": "T", "tags": "python"},
        )

        assert response.status_code == 500
        assert "tags" in response.json()["error"]
        assert (await test_client.get("/api/links")).json() == []
