"""
Image model for socialgallery application.

This module contains the GalleryImage dataclass together with the vote
and rating-tally types attached to every image.
"""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from .timestamps import format_timestamp, parse_timestamp


class Vote(str, Enum):
    """A single visitor's opinion of an image."""

    GOOD = "good"
    CAN_IMPROVE = "canImprove"


@dataclass(frozen=True)
class Ratings:
    """Aggregate vote tallies for one image."""

    good: int = 0
    can_improve: int = 0

    @property
    def total(self) -> int:
        return self.good + self.can_improve

    def count(self, vote: Vote) -> int:
        """Return the tally for one vote bucket."""
        return self.good if vote == Vote.GOOD else self.can_improve

    def adjusted(self, vote: Vote, delta: int) -> "Ratings":
        """Return new tallies with ``delta`` applied to one bucket, floored at zero."""
        if vote == Vote.GOOD:
            return replace(self, good=max(self.good + delta, 0))
        return replace(self, can_improve=max(self.can_improve + delta, 0))

    def to_dict(self) -> dict[str, int]:
        return {"good": self.good, "canImprove": self.can_improve}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Ratings":
        data = data or {}
        return cls(good=int(data.get("good", 0)), can_improve=int(data.get("canImprove", 0)))


@dataclass
class GalleryImage:
    """
    An image published to the shared gallery.

    Instances are treated as immutable snapshots: the rating engine and the
    upload pipeline build new instances instead of editing existing ones.
    ``author`` is a copy of the uploader's nickname at publish time, not a
    live reference to the profile.
    """

    id: int
    title: str
    author: str
    image_url: str
    upload_date: datetime
    description: str = ""
    ratings: Ratings = field(default_factory=Ratings)
    user_ratings: dict[str, Vote] = field(default_factory=dict)
    views: int = 0
    comments: list[Any] = field(default_factory=list)

    @classmethod
    def create_new(
        cls,
        image_id: int,
        title: str,
        author: str,
        image_url: str,
        description: str = "",
        upload_date: datetime | None = None,
    ) -> "GalleryImage":
        """
        Create a freshly published image with no votes and no views.

        Args:
            image_id: Identifier unique within the collection
            title: Non-empty title
            author: Uploader's nickname
            image_url: Data URL or remote URL of the picture
            description: Optional free text
            upload_date: Publish time (defaults to now)

        Returns:
            New GalleryImage instance
        """
        return cls(
            id=image_id,
            title=title,
            author=author,
            image_url=image_url,
            upload_date=upload_date or datetime.now(UTC),
            description=description,
        )

    @property
    def total_ratings(self) -> int:
        """Number of visitors who voted on this image."""
        return self.ratings.total

    @property
    def positive_percentage(self) -> float:
        """Share of "good" votes as a percentage, 0 when nobody voted."""
        if self.ratings.total == 0:
            return 0.0
        return self.ratings.good / self.ratings.total * 100

    def vote_of(self, voter_key: str | None) -> Vote | None:
        """Return the active vote of a visitor, if any."""
        if voter_key is None:
            return None
        return self.user_ratings.get(voter_key)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the image to its persisted JSON shape.

        Returns:
            Dictionary with camelCase keys
        """
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "author": self.author,
            "imageUrl": self.image_url,
            "uploadDate": format_timestamp(self.upload_date),
            "ratings": self.ratings.to_dict(),
            "userRatings": {voter: vote.value for voter, vote in self.user_ratings.items()},
            "views": self.views,
            "comments": list(self.comments),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GalleryImage":
        """
        Rebuild an image from its persisted JSON shape.

        Counters, the vote map and the description may be missing and fall
        back to their empty values; identity, title, author, URL and upload
        date are required.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a date or vote value cannot be parsed
        """
        return cls(
            id=data["id"],
            title=data["title"],
            author=data["author"],
            image_url=data["imageUrl"],
            upload_date=parse_timestamp(data["uploadDate"]),
            description=data.get("description") or "",
            ratings=Ratings.from_dict(data.get("ratings")),
            user_ratings={voter: Vote(vote) for voter, vote in (data.get("userRatings") or {}).items() if vote},
            views=int(data.get("views", 0)),
            comments=list(data.get("comments") or []),
        )

    def validate(self) -> bool:
        """
        Validate the image.

        Returns:
            True if the title and URL are set and no counter is negative
        """
        if not self.title or not self.title.strip() or not self.image_url:
            return False

        return self.views >= 0 and self.ratings.good >= 0 and self.ratings.can_improve >= 0
