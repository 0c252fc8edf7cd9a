"""
User profile model for socialgallery application.

There is no authentication: the nickname a visitor picks is the only
identity, and one profile is active per browser session.
"""

from dataclasses import dataclass, replace
from datetime import UTC, datetime

from .timestamps import format_timestamp, parse_timestamp


@dataclass
class UserProfile:
    """
    The visitor currently using the gallery.

    Profiles are treated as immutable snapshots; operations that change a
    profile return a new instance.
    """

    nickname: str
    join_date: datetime
    uploads_count: int = 0

    @classmethod
    def create_new(cls, nickname: str, join_date: datetime | None = None) -> "UserProfile":
        """
        Create a profile for a freshly chosen nickname.

        Args:
            nickname: Display handle; surrounding whitespace is dropped
            join_date: When the nickname was chosen (defaults to now)

        Returns:
            New UserProfile with no uploads
        """
        return cls(
            nickname=nickname.strip(),
            join_date=join_date or datetime.now(UTC),
            uploads_count=0,
        )

    def with_upload(self) -> "UserProfile":
        """Return a copy that counts one more published image."""
        return replace(self, uploads_count=self.uploads_count + 1)

    def to_dict(self) -> dict:
        """
        Convert the profile to its persisted JSON shape.

        Returns:
            Dictionary with camelCase keys
        """
        return {
            "nickname": self.nickname,
            "joinDate": format_timestamp(self.join_date),
            "uploadsCount": self.uploads_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        """
        Rebuild a profile from its persisted JSON shape.

        Raises:
            KeyError: If the nickname or join date is missing
            ValueError: If the join date cannot be parsed
        """
        return cls(
            nickname=data["nickname"],
            join_date=parse_timestamp(data["joinDate"]),
            uploads_count=int(data.get("uploadsCount", 0)),
        )

    def validate(self) -> bool:
        """Check the profile has a usable nickname and a sane upload count."""
        return bool(self.nickname and self.nickname.strip()) and self.uploads_count >= 0
