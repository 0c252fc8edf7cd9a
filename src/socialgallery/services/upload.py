"""
Upload pipeline for socialgallery application.

Publishing turns a pending image (a displayable URL plus the original file
details) into a GalleryImage at the head of the collection and credits
the upload to the publishing user.
"""

import time
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from ..logging_config import get_logger, log_user_action
from ..models.image import GalleryImage
from ..models.user import UserProfile
from ..ui.handlers.error import ValidationError

logger = get_logger(__name__)


@dataclass(frozen=True)
class PendingImage:
    """An image chosen for upload but not yet published."""

    preview_url: str
    filename: str = ""
    mime_type: str = ""
    size: int = 0


def can_publish(pending_image: PendingImage | None, title: str | None) -> bool:
    """Return True when there is an image to publish and a non-blank title."""
    return pending_image is not None and bool(pending_image.preview_url) and bool((title or "").strip())


def generate_image_id(collection: Sequence[GalleryImage], now: datetime | None = None) -> int:
    """
    Return a time-derived id that no image in ``collection`` uses.

    The id is the publish time in epoch milliseconds, bumped past the
    largest existing id when two publishes land in the same millisecond.
    """
    millis = int((now.timestamp() if now else time.time()) * 1000)
    numeric_ids = [image.id for image in collection if isinstance(image.id, int)]
    if numeric_ids:
        millis = max(millis, max(numeric_ids) + 1)
    return millis


def publish(
    collection: Sequence[GalleryImage],
    user: UserProfile,
    pending_image: PendingImage | None,
    title: str | None,
    description: str | None = "",
    now: datetime | None = None,
) -> tuple[list[GalleryImage], UserProfile]:
    """
    Publish ``pending_image`` on behalf of ``user``.

    Args:
        collection: Current gallery snapshot
        user: Profile of the uploader
        pending_image: Image chosen for upload
        title: Image title; surrounding whitespace is dropped
        description: Optional description; surrounding whitespace is dropped
        now: Publish time (defaults to now)

    Returns:
        tuple: (new collection with the image first, profile with one more upload)

    Raises:
        ValidationError: If there is no pending image or the title is blank
    """
    if not can_publish(pending_image, title):
        raise ValidationError(
            "Publish requires an image and a non-empty title",
            code="publish_validation_failed",
            user_message="Selecciona una imagen y escribe un título antes de publicar.",
            details={"has_image": pending_image is not None, "has_title": bool((title or "").strip())},
        )

    upload_date = now or datetime.now(UTC)
    image = GalleryImage.create_new(
        image_id=generate_image_id(collection, upload_date),
        title=(title or "").strip(),
        author=user.nickname,
        image_url=pending_image.preview_url,  # type: ignore[union-attr]
        description=(description or "").strip(),
        upload_date=upload_date,
    )

    updated_user = user.with_upload()

    log_user_action(
        user.nickname,
        "image_published",
        image_id=image.id,
        title=image.title,
        filename=pending_image.filename,
        size=pending_image.size,
        uploads_count=updated_user.uploads_count,
    )

    return [image, *collection], updated_user
