"""Tests for timeline item endpoints"""
import pytest


class TestGetTimeline:
    """Tests for GET /api/items"""

    @pytest.mark.asyncio
    async def test_empty_timeline(self, client):
        """
        GIVEN no document on disk
        WHEN fetching the timeline
        THEN the default document is returned
        """
        response = await client.get("/api/items")

        assert response.status_code == 200
        assert response.json() == {"startDate": "2022-12-25", "items": []}

    @pytest.mark.asyncio
    async def test_malformed_document_served_as_default(self, client, write_document):
        write_document("{not json")

        response = await client.get("/api/items")

        assert response.status_code == 200
        assert response.json()["items"] == []

    @pytest.mark.asyncio
    async def test_deeply_nested_document_served_as_default(self, client, write_document):
        """
        GIVEN a document whose items nest deeper than the JSON decoder can follow
        WHEN fetching the timeline and the upload listing
        THEN both succeed with the default document and nothing cleaned
        """
        write_document('{"startDate": "2023-01-01", "items": ' + "[" * 200000 + "]" * 200000 + "}")

        timeline = await client.get("/api/items")
        uploads = await client.get("/api/uploads")

        assert timeline.status_code == 200
        assert timeline.json() == {"startDate": "2022-12-25", "items": []}
        assert uploads.status_code == 200
        assert uploads.json()["cleaned"] == 0

    @pytest.mark.asyncio
    async def test_trailing_slash_returns_timeline(self, client, write_document):
        write_document({"startDate": "2023-01-01", "items": []})

        response = await client.get("/api/items/")

        assert response.status_code == 200
        assert response.json() == {"startDate": "2023-01-01", "items": []}

    @pytest.mark.asyncio
    async def test_legacy_fields_pass_through(self, client, write_document):
        write_document(
            {
                "startDate": "2023-01-01",
                "items": [
                    {"id": "a", "date": "d", "title": "t", "image": "/uploads/x.png", "mood": "ok"}
                ],
            }
        )

        response = await client.get("/api/items")

        item = response.json()["items"][0]
        assert item["image"] == "/uploads/x.png"
        assert item["mood"] == "ok"
        assert item["images"] == []
        assert item["views"] == {"zhl": "", "yxh": ""}


class TestCreateItem:
    """Tests for POST /api/items"""

    @pytest.mark.asyncio
    async def test_create_item(self, client, read_document):
        response = await client.post(
            "/api/items",
            json={"title": "Trip", "date": "2023-05-01", "images": ["/uploads/a.png"]},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"].startswith("item-")
        assert data["title"] == "Trip"
        assert data["views"] == {"zhl": "", "yxh": ""}
        assert "image" not in data
        assert read_document()["items"][0]["id"] == data["id"]

    @pytest.mark.asyncio
    async def test_create_truncates_images(self, client):
        images = [f"/uploads/{i}.png" for i in range(12)]

        response = await client.post(
            "/api/items", json={"title": "t", "date": "d", "images": images}
        )

        assert response.json()["images"] == images[:9]

    @pytest.mark.asyncio
    async def test_create_missing_title(self, client, data_path):
        """
        GIVEN a body without a title
        WHEN creating an item
        THEN 400 is returned with the error body and nothing is written
        """
        response = await client.post("/api/items", json={"date": "2023-05-01"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert data["message"] == "title, date are required"
        assert not data_path.exists()

    @pytest.mark.asyncio
    async def test_create_malformed_body(self, client):
        response = await client.post(
            "/api/items",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"


class TestUpdateItem:
    """Tests for PUT /api/items/{id}"""

    @pytest.mark.asyncio
    async def test_partial_update(self, client):
        created = (
            await client.post(
                "/api/items",
                json={"title": "t", "date": "d", "images": ["/uploads/a.png"], "views": {"zhl": "Z"}},
            )
        ).json()

        response = await client.put(
            f"/api/items/{created['id']}", json={"views": {"yxh": "Y"}}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "t"
        assert data["images"] == ["/uploads/a.png"]
        assert data["views"] == {"zhl": "Z", "yxh": "Y"}

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, client):
        response = await client.put("/api/items/nope", json={"title": "x"})

        assert response.status_code == 404
        assert response.json()["error"] == "RESOURCE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_empty_title(self, client):
        created = (await client.post("/api/items", json={"title": "t", "date": "d"})).json()

        response = await client.put(f"/api/items/{created['id']}", json={"title": ""})

        assert response.status_code == 400


class TestDeleteItem:
    """Tests for DELETE /api/items/{id}"""

    @pytest.mark.asyncio
    async def test_delete_twice(self, client):
        created = (await client.post("/api/items", json={"title": "t", "date": "d"})).json()

        first = await client.delete(f"/api/items/{created['id']}")
        second = await client.delete(f"/api/items/{created['id']}")

        assert first.status_code == 200
        assert first.json()["id"] == created["id"]
        assert second.status_code == 404
        assert (await client.get("/api/items")).json()["items"] == []
