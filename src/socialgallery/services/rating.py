"""
Rating engine for socialgallery application.

Every visitor holds at most one active vote per image. Re-voting replaces
the previous vote, and the aggregate tallies are kept equal to the number
of recorded votes. All functions return a new collection and leave their
inputs untouched; persisting the result is the caller's job.
"""

from collections.abc import Sequence
from dataclasses import replace

from ..logging_config import get_logger
from ..models.image import GalleryImage, Vote
from ..models.user import UserProfile

logger = get_logger(__name__)

# Voter key used when no nickname has been chosen yet
ANONYMOUS_VOTER = "anonymous"


def voter_key_for(user: UserProfile | None) -> str:
    """Return the key under which ``user`` votes."""
    return user.nickname if user else ANONYMOUS_VOTER


def find_image(collection: Sequence[GalleryImage], image_id: int) -> GalleryImage | None:
    """Return the image with ``image_id``, or None if it is not in the collection."""
    return next((image for image in collection if image.id == image_id), None)


def apply_vote(image: GalleryImage, voter_key: str, vote: Vote | str) -> GalleryImage:
    """
    Record ``voter_key``'s vote on a single image.

    A previous vote by the same voter is withdrawn from its bucket before
    the new one is counted, so re-submitting the same vote leaves the
    tallies where they were.

    Raises:
        ValueError: If ``vote`` is not a known vote value
    """
    vote = Vote(vote)
    ratings = image.ratings

    previous = image.user_ratings.get(voter_key)
    if previous is not None:
        ratings = ratings.adjusted(previous, -1)

    user_ratings = dict(image.user_ratings)
    user_ratings[voter_key] = vote

    return replace(image, ratings=ratings.adjusted(vote, 1), user_ratings=user_ratings)


def rate(
    collection: Sequence[GalleryImage], image_id: int, voter_key: str, vote: Vote | str
) -> list[GalleryImage]:
    """
    Apply a vote to the image with ``image_id``.

    Args:
        collection: Current gallery snapshot
        image_id: Image being rated
        voter_key: Nickname of the voter, or ANONYMOUS_VOTER
        vote: Vote.GOOD or Vote.CAN_IMPROVE (string values accepted)

    Returns:
        New snapshot; equal to the input when the image does not exist
    """
    vote = Vote(vote)

    if find_image(collection, image_id) is None:
        logger.warning("rate_image_not_found", image_id=image_id, voter=voter_key)
        return list(collection)

    updated = [apply_vote(image, voter_key, vote) if image.id == image_id else image for image in collection]

    logger.info("image_rated", image_id=image_id, voter=voter_key, vote=vote.value)
    return updated


def view(collection: Sequence[GalleryImage], image_id: int) -> list[GalleryImage]:
    """
    Count one view of the image with ``image_id``.

    Every call counts, including repeated opens and the uploader's own.

    Returns:
        New snapshot; equal to the input when the image does not exist
    """
    if find_image(collection, image_id) is None:
        logger.warning("view_image_not_found", image_id=image_id)
        return list(collection)

    updated = [replace(image, views=image.views + 1) if image.id == image_id else image for image in collection]

    logger.debug("image_viewed", image_id=image_id)
    return updated
