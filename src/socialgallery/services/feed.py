"""
Feed projection for socialgallery application.

The feed is the filtered and sorted view of the gallery that the UI
displays. Projection is a pure function of its inputs.
"""

from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from ..logging_config import get_logger
from ..models.image import GalleryImage
from ..models.user import UserProfile

logger = get_logger(__name__)


class FeedFilter(str, Enum):
    """Which images make it into the feed."""

    ALL = "all"
    MY_IMAGES = "my-images"
    TOP_RATED = "top-rated"

    @property
    def label(self) -> str:
        return FILTER_LABELS[self]


class SortKey(str, Enum):
    """Order of the feed."""

    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_LIKED = "most-liked"
    MOST_VIEWED = "most-viewed"

    @property
    def label(self) -> str:
        return SORT_LABELS[self]


FILTER_LABELS = {
    FeedFilter.ALL: "Todas",
    FeedFilter.MY_IMAGES: "Mis Imágenes",
    FeedFilter.TOP_RATED: "Mejor Calificadas",
}

SORT_LABELS = {
    SortKey.NEWEST: "Más Recientes",
    SortKey.OLDEST: "Más Antiguas",
    SortKey.MOST_LIKED: "Más Gustadas",
    SortKey.MOST_VIEWED: "Más Vistas",
}

# (sort key function, descending)
_SORTS: dict[SortKey, tuple[Callable[[GalleryImage], Any], bool]] = {
    SortKey.NEWEST: (lambda image: image.upload_date, True),
    SortKey.OLDEST: (lambda image: image.upload_date, False),
    SortKey.MOST_LIKED: (lambda image: image.ratings.good, True),
    SortKey.MOST_VIEWED: (lambda image: image.views, True),
}


def _coerce(enum_type: type[Enum], value: Any) -> Any:
    try:
        return enum_type(value)
    except ValueError:
        return None


def filter_images(
    collection: Sequence[GalleryImage], feed_filter: FeedFilter | str, current_user: UserProfile | None
) -> list[GalleryImage]:
    """
    Keep the images selected by ``feed_filter``.

    "my-images" without a current user selects nothing; an unknown filter
    selects everything.
    """
    selected = _coerce(FeedFilter, feed_filter)

    if selected is FeedFilter.MY_IMAGES:
        if current_user is None:
            return []
        return [image for image in collection if image.author == current_user.nickname]

    if selected is FeedFilter.TOP_RATED:
        return [image for image in collection if image.ratings.good > image.ratings.can_improve]

    if selected is None:
        logger.debug("unknown_feed_filter", feed_filter=feed_filter)

    return list(collection)


def sort_images(images: Sequence[GalleryImage], sort_key: SortKey | str) -> list[GalleryImage]:
    """
    Order ``images`` by ``sort_key``.

    The sort is stable, so ties keep their existing relative order. An
    unknown key leaves the order unchanged.
    """
    selected = _coerce(SortKey, sort_key)
    if selected is None:
        logger.debug("unknown_sort_key", sort_key=sort_key)
        return list(images)

    key, descending = _SORTS[selected]
    return sorted(images, key=key, reverse=descending)


def project(
    collection: Sequence[GalleryImage],
    feed_filter: FeedFilter | str = FeedFilter.ALL,
    sort_key: SortKey | str = SortKey.NEWEST,
    current_user: UserProfile | None = None,
) -> list[GalleryImage]:
    """
    Build the feed shown to ``current_user``.

    Args:
        collection: Current gallery snapshot
        feed_filter: Filter applied first
        sort_key: Ordering applied to the filtered images
        current_user: Active profile, used by the "my-images" filter

    Returns:
        New list of images; the collection itself is not modified
    """
    return sort_images(filter_images(collection, feed_filter, current_user), sort_key)
