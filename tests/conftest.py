"""Shared test fixtures for pytest"""
import json
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from keepsake.application.services.upload_collector import \
    UploadGarbageCollector
from keepsake.application.use_cases.timeline.timeline_operations import \
    TimelineService
from keepsake.application.use_cases.uploads.upload_operations import \
    UploadService
from keepsake.infrastructure.external.storage import (LocalUploadStorage,
                                                      StaticResolverRegistry)
from keepsake.infrastructure.persistence import JsonTimelineRepository
from keepsake.main import app
from keepsake.presentation.api.dependencies import (get_static_resolvers,
                                                    get_timeline_repository,
                                                    get_upload_storage)

# A fixed millisecond timestamp for reproducible ids
FROZEN_MILLIS = 1_700_000_000_000


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = FROZEN_MILLIS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int = 1) -> None:
        self.now += millis


@pytest.fixture
def clock() -> FakeClock:
    """Provides a frozen millisecond clock."""
    return FakeClock()


@pytest.fixture
def data_path(tmp_path) -> Path:
    """Path of the timeline document (not created)."""
    return tmp_path / "data" / "timeline.json"


@pytest.fixture
def upload_dir(tmp_path) -> Path:
    """Provides an empty upload directory."""
    path = tmp_path / "data" / "uploads"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def public_dir(tmp_path) -> Path:
    """Provides a public asset directory with index and gallery pages."""
    path = tmp_path / "public"
    path.mkdir()
    (path / "index.html").write_text("<h1>timeline</h1>", encoding="utf-8")
    (path / "gallery.html").write_text("<h1>gallery</h1>", encoding="utf-8")
    (path / "app.js").write_text("console.log('hi');", encoding="utf-8")
    return path


@pytest.fixture
def admin_dir(tmp_path) -> Path:
    """Provides an admin asset directory."""
    path = tmp_path / "admin"
    path.mkdir()
    (path / "index.html").write_text("<h1>admin</h1>", encoding="utf-8")
    (path / "admin.css").write_text("body {}", encoding="utf-8")
    return path


@pytest.fixture
def write_document(data_path):
    """Writes a raw timeline document (dict or string) to data_path."""

    def _write(document: dict[str, Any] | str) -> Path:
        data_path.parent.mkdir(parents=True, exist_ok=True)
        text = document if isinstance(document, str) else json.dumps(document, ensure_ascii=False)
        data_path.write_text(text, encoding="utf-8")
        return data_path

    return _write


@pytest.fixture
def read_document(data_path):
    """Reads the persisted timeline document."""

    def _read() -> dict[str, Any]:
        return json.loads(data_path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def repository(data_path, clock) -> JsonTimelineRepository:
    """Provides a repository over a temporary document."""
    return JsonTimelineRepository(data_path=data_path, clock=clock)


@pytest.fixture
def upload_storage(upload_dir, clock) -> LocalUploadStorage:
    """Provides upload storage over a temporary directory."""
    return LocalUploadStorage(storage_root=upload_dir, clock=clock)


@pytest.fixture
def timeline_service(repository, clock) -> TimelineService:
    """Provides a TimelineService over the temporary repository."""
    return TimelineService(repository=repository, clock=clock)


@pytest.fixture
def collector(repository, upload_storage) -> UploadGarbageCollector:
    """Provides a garbage collector over the temporary document and uploads."""
    return UploadGarbageCollector(repository=repository, storage=upload_storage)


@pytest.fixture
def upload_service(upload_storage, collector) -> UploadService:
    """Provides an UploadService with a 1KB decoded size limit."""
    return UploadService(storage=upload_storage, collector=collector, max_upload_size=1024)


@pytest.fixture
def static_resolvers(public_dir, admin_dir, upload_dir) -> StaticResolverRegistry:
    """Provides resolvers for the temporary public, admin and upload directories."""
    return StaticResolverRegistry.from_directories(
        public_dir=public_dir,
        admin_dir=admin_dir,
        upload_dir=upload_dir,
    )


@pytest.fixture
async def client(repository, upload_storage, static_resolvers):
    """HTTP client for API testing"""
    app.dependency_overrides[get_timeline_repository] = lambda: repository
    app.dependency_overrides[get_upload_storage] = lambda: upload_storage
    app.dependency_overrides[get_static_resolvers] = lambda: static_resolvers

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
