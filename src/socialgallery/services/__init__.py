"""
Services module for socialgallery application.

This module contains the gallery's business logic:
- rating: Vote bookkeeping and view counting
- feed: Filtering and sorting of the displayed feed
- upload: Publishing new images
- image_processor: Turning uploaded files into pending images
- storage: Key-value persistence and the gallery repository
"""

from .feed import FeedFilter, SortKey, project
from .image_processor import ImageProcessor, get_image_processor
from .rating import ANONYMOUS_VOTER, rate, view, voter_key_for
from .storage import (
    IMAGE_COLLECTION_KEY,
    USER_PROFILE_KEY,
    DuckDBStore,
    GalleryRepository,
    InMemoryStore,
    KeyValueStore,
    get_gallery_repository,
)
from .upload import PendingImage, can_publish, publish

__all__ = [
    "ANONYMOUS_VOTER",
    "rate",
    "view",
    "voter_key_for",
    "FeedFilter",
    "SortKey",
    "project",
    "PendingImage",
    "can_publish",
    "publish",
    "ImageProcessor",
    "get_image_processor",
    "KeyValueStore",
    "InMemoryStore",
    "DuckDBStore",
    "GalleryRepository",
    "get_gallery_repository",
    "USER_PROFILE_KEY",
    "IMAGE_COLLECTION_KEY",
]
