"""Persistence for the gallery: a synchronous key-value store and the repository on top of it."""

import json
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any, Protocol

import duckdb

from ..config import get_db_path, get_seed_example_images, get_storage_backend
from ..logging_config import get_logger
from ..models.database import DatabaseManager, get_database_manager
from ..models.image import GalleryImage, Ratings
from ..models.schema import DELETE_VALUE_STATEMENT, SELECT_VALUE_STATEMENT, UPSERT_VALUE_STATEMENT
from ..models.user import UserProfile
from ..ui.handlers.error import MalformedStorageError, StorageError

logger = get_logger(__name__)

USER_PROFILE_KEY = "user-profile"
IMAGE_COLLECTION_KEY = "image-collection"


class KeyValueStore(Protocol):
    """Synchronous string store addressed by key. Writes are last-write-wins."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryStore:
    """Dict-backed store, used for ephemeral sessions and tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class DuckDBStore:
    """Store persisted in a single DuckDB table."""

    def __init__(self, db_manager: DatabaseManager) -> None:
        self.db_manager = db_manager

    @classmethod
    def open(cls, db_path: str) -> "DuckDBStore":
        """
        Open (creating if needed) the store at ``db_path``.

        Raises:
            StorageError: If the database cannot be opened
        """
        try:
            return cls(get_database_manager(db_path))
        except RuntimeError as e:
            raise StorageError(
                f"Failed to open gallery database at {db_path}: {e}",
                code="database_open_failed",
                details={"db_path": db_path},
                recoverable=False,
                original_exception=e,
            ) from e

    def get(self, key: str) -> str | None:
        try:
            rows = self.db_manager.execute_query(SELECT_VALUE_STATEMENT, (key,))
        except duckdb.Error as e:
            raise StorageError(
                f"Failed to read key '{key}': {e}",
                code="storage_read_failed",
                details={"key": key},
                original_exception=e,
            ) from e
        return rows[0][0] if rows else None

    def set(self, key: str, value: str) -> None:
        try:
            self.db_manager.execute_query(UPSERT_VALUE_STATEMENT, (key, value))
        except duckdb.Error as e:
            raise StorageError(
                f"Failed to write key '{key}': {e}",
                code="storage_write_failed",
                details={"key": key, "size": len(value)},
                original_exception=e,
            ) from e
        logger.debug("storage_key_written", key=key, size=len(value))

    def delete(self, key: str) -> None:
        try:
            self.db_manager.execute_query(DELETE_VALUE_STATEMENT, (key,))
        except duckdb.Error as e:
            raise StorageError(
                f"Failed to delete key '{key}': {e}",
                code="storage_delete_failed",
                details={"key": key},
                original_exception=e,
            ) from e

    def close(self) -> None:
        self.db_manager.close()


def example_images() -> list[GalleryImage]:
    """Images shown in a gallery that has never been saved before."""
    return [
        GalleryImage(
            id=1,
            title="Atardecer en la playa",
            description="Una hermosa puesta de sol",
            author="FotoLover",
            image_url="https://images.unsplash.com/photo-1506905925346-21bda4d32df4?w=500&h=300&fit=crop",
            upload_date=datetime(2024, 1, 15, tzinfo=UTC),
            ratings=Ratings(good=15, can_improve=3),
            views=89,
        ),
        GalleryImage(
            id=2,
            title="Montañas nevadas",
            description="Paisaje invernal espectacular",
            author="NatureFan",
            image_url="https://images.unsplash.com/photo-1464822759844-d150baec0494?w=500&h=300&fit=crop",
            upload_date=datetime(2024, 1, 10, tzinfo=UTC),
            ratings=Ratings(good=22, can_improve=1),
            views=156,
        ),
    ]


class GalleryRepository:
    """
    Loads and saves the two persisted records: the active user profile and
    the image collection.

    Every save writes the full snapshot. Unreadable data never stops the
    application: loading falls back to "no user" or an empty collection.
    """

    def __init__(self, store: KeyValueStore, seed_examples: bool = True) -> None:
        self.store = store
        self.seed_examples = seed_examples

    def _decode(self, key: str) -> Any | None:
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedStorageError(
                f"Stored value for '{key}' is not valid JSON: {e}",
                code="malformed_storage",
                details={"key": key},
                original_exception=e,
            ) from e

    def load_user(self) -> UserProfile | None:
        """Return the saved profile, or None when no nickname was chosen or the record is unreadable."""
        try:
            data = self._decode(USER_PROFILE_KEY)
            if data is None:
                return None
            user = UserProfile.from_dict(data)
        except StorageError:
            logger.warning("malformed_storage", key=USER_PROFILE_KEY, fallback="no_user")
            return None
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.warning("malformed_storage", key=USER_PROFILE_KEY, fallback="no_user", error=str(e))
            return None

        if not user.validate():
            logger.warning("malformed_storage", key=USER_PROFILE_KEY, fallback="no_user", error="invalid_profile")
            return None
        return user

    def save_user(self, user: UserProfile) -> None:
        self.store.set(USER_PROFILE_KEY, json.dumps(user.to_dict()))
        logger.debug("user_saved", nickname=user.nickname, uploads_count=user.uploads_count)

    def clear_user(self) -> None:
        """Forget the active profile so a new nickname can be chosen."""
        self.store.delete(USER_PROFILE_KEY)
        logger.info("user_cleared")

    def load_images(self) -> list[GalleryImage]:
        """
        Return the saved collection.

        A store that has never held a collection is seeded with the example
        images (when enabled) and the seed is saved immediately.
        """
        try:
            data = self._decode(IMAGE_COLLECTION_KEY)
        except StorageError:
            logger.warning("malformed_storage", key=IMAGE_COLLECTION_KEY, fallback="empty_collection")
            return []

        if data is None:
            images = example_images() if self.seed_examples else []
            self.save_images(images)
            logger.info("image_collection_seeded", count=len(images))
            return images

        if not isinstance(data, list):
            logger.warning(
                "malformed_storage", key=IMAGE_COLLECTION_KEY, fallback="empty_collection", found=type(data).__name__
            )
            return []

        images = []
        for index, entry in enumerate(data):
            try:
                image = GalleryImage.from_dict(entry)
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                logger.warning("malformed_image_skipped", key=IMAGE_COLLECTION_KEY, index=index, error=str(e))
                continue

            if not image.validate():
                logger.warning("malformed_image_skipped", key=IMAGE_COLLECTION_KEY, index=index, error="invalid_image")
                continue
            images.append(image)

        logger.debug("image_collection_loaded", count=len(images))
        return images

    def save_images(self, images: Sequence[GalleryImage]) -> None:
        self.store.set(IMAGE_COLLECTION_KEY, json.dumps([image.to_dict() for image in images]))
        logger.debug("image_collection_saved", count=len(images))


_gallery_repository: GalleryRepository | None = None


def create_store(backend: str, db_path: str) -> KeyValueStore:
    """Build the store named by ``backend`` ("duckdb" or "memory")."""
    if backend == "memory":
        return InMemoryStore()
    return DuckDBStore.open(db_path)


def get_gallery_repository() -> GalleryRepository:
    """
    Get the global gallery repository, built from configuration on first use.

    Returns:
        GalleryRepository: Global repository instance
    """
    global _gallery_repository

    if _gallery_repository is None:
        backend = get_storage_backend()
        db_path = get_db_path()
        _gallery_repository = GalleryRepository(create_store(backend, db_path), seed_examples=get_seed_example_images())
        logger.info("gallery_repository_initialized", backend=backend, db_path=db_path if backend == "duckdb" else None)

    return _gallery_repository


def reset_gallery_repository() -> None:
    """Drop the global repository, closing its database connection."""
    global _gallery_repository

    if _gallery_repository is not None and isinstance(_gallery_repository.store, DuckDBStore):
        _gallery_repository.store.close()
    _gallery_repository = None
