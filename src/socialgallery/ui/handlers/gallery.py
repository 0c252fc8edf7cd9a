"""Gallery intent handlers for socialgallery application.

Each handler runs one user intent to completion: read the snapshot held in
the session state, compute the new snapshot with the services layer,
persist it, and store it back in the session state.
"""

from collections.abc import MutableMapping
from typing import Any

import structlog

from socialgallery.logging_config import log_context, log_user_action
from socialgallery.models.image import GalleryImage, Vote
from socialgallery.models.user import UserProfile
from socialgallery.services.feed import FeedFilter, SortKey, project
from socialgallery.services.image_processor import get_image_processor
from socialgallery.services.rating import rate, view, voter_key_for
from socialgallery.services.storage import GalleryRepository, get_gallery_repository
from socialgallery.services.upload import PendingImage, can_publish, publish
from socialgallery.ui.handlers.error import StorageError, ValidationError

logger = structlog.get_logger(__name__)

SessionState = MutableMapping[str, Any]

UPLOAD_SESSION_KEYS = ("pending_image", "image_title", "image_description")


def _repository(repository: GalleryRepository | None) -> GalleryRepository:
    return repository if repository is not None else get_gallery_repository()


def initialize_gallery_state(session_state: SessionState, repository: GalleryRepository | None = None) -> None:
    """Load the saved user and collection into the session once per session."""
    session_state.setdefault("feed_filter", FeedFilter.ALL.value)
    session_state.setdefault("sort_key", SortKey.NEWEST.value)
    session_state.setdefault("show_upload", False)
    session_state.setdefault("pending_image", None)

    if session_state.get("gallery_loaded"):
        return

    repo = _repository(repository)
    session_state["user"] = repo.load_user()
    session_state["images"] = repo.load_images()
    session_state["gallery_loaded"] = True

    user = session_state["user"]
    logger.info(
        "gallery_state_loaded",
        nickname=user.nickname if user else None,
        image_count=len(session_state["images"]),
    )


def get_current_user(session_state: SessionState) -> UserProfile | None:
    return session_state.get("user")


def get_images(session_state: SessionState) -> list[GalleryImage]:
    return session_state.get("images") or []


def handle_set_user(
    session_state: SessionState, nickname: str, repository: GalleryRepository | None = None
) -> UserProfile:
    """
    Create and persist the profile for a newly chosen nickname.

    Raises:
        ValidationError: If the nickname is blank
    """
    if not nickname or not nickname.strip():
        raise ValidationError(
            "Nickname must not be empty",
            code="nickname_required",
            user_message="Elige un sobrenombre para entrar.",
        )

    user = UserProfile.create_new(nickname)
    _repository(repository).save_user(user)
    session_state["user"] = user

    log_user_action(user.nickname, "nickname_set")
    return user


def handle_sign_out(session_state: SessionState, repository: GalleryRepository | None = None) -> None:
    """Forget the active profile so another nickname can be picked."""
    user = get_current_user(session_state)
    _repository(repository).clear_user()
    session_state["user"] = None
    session_state["feed_filter"] = FeedFilter.ALL.value
    clear_upload_session_state(session_state)

    log_user_action(voter_key_for(user), "signed_out")


def handle_rate_image(
    session_state: SessionState, image_id: int, vote: Vote | str, repository: GalleryRepository | None = None
) -> None:
    """Record the current user's vote on an image and persist the collection."""
    voter_key = voter_key_for(get_current_user(session_state))
    images = rate(get_images(session_state), image_id, voter_key, vote)

    _repository(repository).save_images(images)
    session_state["images"] = images


def handle_view_image(session_state: SessionState, image_id: int, repository: GalleryRepository | None = None) -> None:
    """Count a view of an image and persist the collection."""
    images = view(get_images(session_state), image_id)

    _repository(repository).save_images(images)
    session_state["images"] = images


def handle_file_select(session_state: SessionState, uploaded_file: Any) -> PendingImage:
    """
    Turn a file from ``st.file_uploader`` into the pending image.

    Raises:
        ValidationError: If the file is not an acceptable image
        ImageProcessingError: If the image cannot be decoded
    """
    image_data = uploaded_file.getvalue()
    pending_image = get_image_processor().create_pending_image(image_data, uploaded_file.name, uploaded_file.type)
    session_state["pending_image"] = pending_image
    return pending_image


def handle_publish_image(
    session_state: SessionState,
    title: str,
    description: str = "",
    repository: GalleryRepository | None = None,
) -> bool:
    """
    Publish the pending image.

    Returns:
        bool: False without side effects when there is no user, no pending
        image or no title; True once the image and profile are saved

    Raises:
        StorageError: If either record cannot be written; the stored
        collection and the session state are left as they were
    """
    user = get_current_user(session_state)
    pending_image = session_state.get("pending_image")

    if user is None or not can_publish(pending_image, title):
        logger.debug("publish_blocked", has_user=user is not None, has_image=pending_image is not None)
        return False

    previous_images = get_images(session_state)

    with log_context(__name__, nickname=user.nickname, operation="publish_image") as log:
        images, updated_user = publish(previous_images, user, pending_image, title, description)

        repo = _repository(repository)
        repo.save_images(images)
        try:
            repo.save_user(updated_user)
        except StorageError:
            # Image and upload credit are stored together or not at all
            repo.save_images(previous_images)
            log.warning("published_image_rolled_back", image_id=images[0].id)
            raise
        log.info("published_image_saved", image_id=images[0].id, image_count=len(images))

    session_state["images"] = images
    session_state["user"] = updated_user
    clear_upload_session_state(session_state)
    return True


def clear_upload_session_state(session_state: SessionState) -> None:
    """Reset the upload form."""
    for key in UPLOAD_SESSION_KEYS:
        session_state.pop(key, None)
    session_state["show_upload"] = False
    # A new key gives the file uploader a fresh, empty widget
    session_state["upload_nonce"] = session_state.get("upload_nonce", 0) + 1


def get_feed(session_state: SessionState) -> list[GalleryImage]:
    """Return the filtered and sorted images for the current session."""
    return project(
        get_images(session_state),
        session_state.get("feed_filter", FeedFilter.ALL.value),
        session_state.get("sort_key", SortKey.NEWEST.value),
        get_current_user(session_state),
    )
