"""
Pytest configuration and fixtures for socialgallery tests.
"""

import io
import tempfile
from collections.abc import Callable, Generator
from datetime import UTC, datetime
from pathlib import Path

import pytest
from PIL import Image

from socialgallery.models.image import GalleryImage, Ratings, Vote
from socialgallery.models.user import UserProfile
from socialgallery.services.storage import GalleryRepository, InMemoryStore


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set up test environment variables."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("GALLERY_STORAGE_BACKEND", "memory")
    monkeypatch.delenv("MAX_FILE_SIZE", raising=False)
    monkeypatch.delenv("MIN_FILE_SIZE", raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_jpeg_data() -> bytes:
    """Provide a small but real JPEG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (64, 64), (200, 120, 40)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def alice() -> UserProfile:
    """Provide an active profile."""
    return UserProfile(nickname="alice", join_date=datetime(2024, 2, 1, tzinfo=UTC), uploads_count=0)


@pytest.fixture
def make_image() -> Callable[..., GalleryImage]:
    """Factory for gallery images with sensible defaults."""

    def _make_image(
        image_id: int,
        author: str = "bob",
        day: int = 1,
        good: int = 0,
        can_improve: int = 0,
        views: int = 0,
        user_ratings: dict[str, Vote] | None = None,
    ) -> GalleryImage:
        return GalleryImage(
            id=image_id,
            title=f"Image {image_id}",
            author=author,
            image_url=f"https://example.com/{image_id}.jpg",
            upload_date=datetime(2024, 1, day, tzinfo=UTC),
            ratings=Ratings(good=good, can_improve=can_improve),
            user_ratings=dict(user_ratings or {}),
            views=views,
        )

    return _make_image


@pytest.fixture
def memory_store() -> InMemoryStore:
    """Provide an empty in-memory key-value store."""
    return InMemoryStore()


@pytest.fixture
def repository(memory_store: InMemoryStore) -> GalleryRepository:
    """Provide a repository without example seeding."""
    return GalleryRepository(memory_store, seed_examples=False)
