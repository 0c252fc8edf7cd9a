"""
Unit tests for UserProfile model.
"""

from datetime import UTC, datetime

import pytest

from socialgallery.models.user import UserProfile


class TestUserProfile:
    """Test cases for UserProfile class."""

    def test_create_new_trims_nickname(self):
        user = UserProfile.create_new("  FotoMaster  ")

        assert user.nickname == "FotoMaster"
        assert user.uploads_count == 0
        assert user.join_date.tzinfo is not None

    def test_with_upload_returns_copy(self, alice):
        updated = alice.with_upload()

        assert updated.uploads_count == 1
        assert alice.uploads_count == 0
        assert updated.nickname == alice.nickname

    def test_to_dict(self, alice):
        assert alice.to_dict() == {
            "nickname": "alice",
            "joinDate": "2024-02-01T00:00:00+00:00",
            "uploadsCount": 0,
        }

    def test_from_dict(self):
        user = UserProfile.from_dict({"nickname": "bob", "joinDate": "2024-02-01T10:00:00.000Z", "uploadsCount": 4})

        assert user.nickname == "bob"
        assert user.join_date == datetime(2024, 2, 1, 10, tzinfo=UTC)
        assert user.uploads_count == 4

    def test_from_dict_without_count(self):
        user = UserProfile.from_dict({"nickname": "bob", "joinDate": "2024-02-01T10:00:00"})
        assert user.uploads_count == 0

    def test_from_dict_missing_nickname(self):
        with pytest.raises(KeyError):
            UserProfile.from_dict({"joinDate": "2024-02-01T10:00:00"})

    def test_validate(self, alice):
        assert alice.validate() is True
        assert UserProfile(nickname=" ", join_date=alice.join_date).validate() is False
