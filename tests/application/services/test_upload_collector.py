"""Tests for the upload garbage collector"""
import pytest

from keepsake.application.services.upload_collector import \
    UploadGarbageCollector
from keepsake.infrastructure.exceptions import (StorageDeleteError,
                                                StorageListError)


class StubStorage:
    """Upload storage whose listing or deletes can be made to fail."""

    def __init__(self, files, fail_list=False, fail_delete=()):
        self.files = list(files)
        self.fail_list = fail_list
        self.fail_delete = set(fail_delete)
        self.deleted = []

    async def list_files(self):
        if self.fail_list:
            raise StorageListError("uploads", "permission denied")
        return list(self.files)

    async def delete(self, filename):
        if filename in self.fail_delete:
            raise StorageDeleteError(filename, "busy")
        self.deleted.append(filename)
        return True


def _document(*items):
    return {"startDate": "2022-12-25", "items": list(items)}


class TestCollect:
    """Tests for a collection pass"""

    @pytest.mark.asyncio
    async def test_deletes_only_unreferenced(self, collector, write_document, upload_dir):
        """
        GIVEN uploads A, B, C where only A and B are referenced
        WHEN collecting twice
        THEN C is deleted by the first pass and nothing by the second
        """
        for name in ("a.png", "b.png", "c.png"):
            (upload_dir / name).write_bytes(b"x")
        write_document(
            _document(
                {"id": "1", "date": "d", "title": "t", "images": ["/uploads/a.png"]},
                {"id": "2", "date": "d", "title": "t", "images": ["/uploads/b.png"]},
            )
        )

        assert await collector.collect() == 1
        assert sorted(p.name for p in upload_dir.iterdir()) == ["a.png", "b.png"]
        assert await collector.collect() == 0

    @pytest.mark.asyncio
    async def test_legacy_image_is_referenced(self, collector, write_document, upload_dir):
        (upload_dir / "old.png").write_bytes(b"x")
        write_document(_document({"id": "1", "date": "d", "title": "t", "image": "/uploads/old.png"}))

        assert await collector.collect() == 0
        assert (upload_dir / "old.png").exists()

    @pytest.mark.asyncio
    async def test_subdirectories_are_kept(self, collector, write_document, upload_dir):
        (upload_dir / "nested").mkdir()
        write_document(_document())

        assert await collector.collect() == 0
        assert (upload_dir / "nested").is_dir()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw", ["{broken", "[" * 200000 + "]" * 200000], ids=["syntax-error", "too-deep"]
    )
    async def test_malformed_document_skips_the_pass(self, collector, write_document, upload_dir, raw):
        """
        GIVEN uploads and a document file that cannot be parsed
        WHEN collecting
        THEN nothing is deleted
        """
        (upload_dir / "a.png").write_bytes(b"x")
        (upload_dir / "b.png").write_bytes(b"x")
        write_document(raw)

        assert await collector.collect() == 0
        assert sorted(p.name for p in upload_dir.iterdir()) == ["a.png", "b.png"]

    @pytest.mark.asyncio
    async def test_missing_document_references_nothing(self, collector, data_path, upload_dir):
        """
        GIVEN no document file yet
        WHEN collecting
        THEN every upload is unreferenced and deleted
        """
        (upload_dir / "a.png").write_bytes(b"x")
        (upload_dir / "b.png").write_bytes(b"x")

        assert not data_path.exists()
        assert await collector.collect() == 2
        assert list(upload_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_list_failure_returns_zero(self, repository):
        storage = StubStorage(["a.png"], fail_list=True)

        assert await UploadGarbageCollector(repository, storage).collect() == 0
        assert storage.deleted == []

    @pytest.mark.asyncio
    async def test_delete_failure_is_skipped_and_not_counted(self, repository):
        storage = StubStorage(["a.png", "b.png", "c.png"], fail_delete={"b.png"})

        assert await UploadGarbageCollector(repository, storage).collect() == 2
        assert storage.deleted == ["a.png", "c.png"]
