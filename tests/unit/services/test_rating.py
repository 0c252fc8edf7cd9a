"""Tests for the rating engine."""

import pytest

from socialgallery.models.image import Ratings, Vote
from socialgallery.models.user import UserProfile
from socialgallery.services.rating import ANONYMOUS_VOTER, apply_vote, find_image, rate, view, voter_key_for


def assert_tallies_match_votes(collection):
    for image in collection:
        assert image.ratings.good + image.ratings.can_improve == len(image.user_ratings)


class TestRate:
    """Test vote bookkeeping."""

    def test_first_vote_then_switch(self, make_image):
        """Test the documented alice scenario on an image with prior anonymous tallies."""
        collection = [make_image(1, good=2, can_improve=0)]

        after_good = rate(collection, 1, "alice", "good")
        assert after_good[0].ratings == Ratings(good=3, can_improve=0)
        assert after_good[0].user_ratings == {"alice": Vote.GOOD}

        after_switch = rate(after_good, 1, "alice", "canImprove")
        assert after_switch[0].ratings == Ratings(good=2, can_improve=1)
        assert after_switch[0].user_ratings == {"alice": Vote.CAN_IMPROVE}

    def test_same_vote_twice_is_idempotent(self, make_image):
        collection = rate([make_image(1)], 1, "alice", Vote.GOOD)

        again = rate(collection, 1, "alice", Vote.GOOD)

        assert again[0].ratings == collection[0].ratings
        assert again[0].user_ratings == collection[0].user_ratings

    def test_switch_keeps_total(self, make_image):
        collection = rate([make_image(1)], 1, "alice", Vote.GOOD)
        before = collection[0].ratings

        after = rate(collection, 1, "alice", Vote.CAN_IMPROVE)[0].ratings

        assert after.good == before.good - 1
        assert after.can_improve == before.can_improve + 1
        assert after.total == before.total

    def test_tallies_match_votes_after_any_sequence(self, make_image):
        collection = [make_image(1), make_image(2)]
        steps = [
            (1, "alice", Vote.GOOD),
            (1, "bob", Vote.CAN_IMPROVE),
            (2, "alice", Vote.CAN_IMPROVE),
            (1, "alice", Vote.CAN_IMPROVE),
            (2, "carol", Vote.GOOD),
            (1, "bob", Vote.CAN_IMPROVE),
            (2, ANONYMOUS_VOTER, Vote.GOOD),
            (2, "alice", Vote.GOOD),
        ]

        for image_id, voter, vote in steps:
            collection = rate(collection, image_id, voter, vote)
            assert_tallies_match_votes(collection)

        assert find_image(collection, 1).user_ratings == {"alice": Vote.CAN_IMPROVE, "bob": Vote.CAN_IMPROVE}
        assert find_image(collection, 2).ratings == Ratings(good=3, can_improve=0)

    def test_unknown_image_is_a_no_op(self, make_image):
        collection = [make_image(1)]

        result = rate(collection, 999, "alice", Vote.GOOD)

        assert result == collection

    def test_input_is_not_mutated(self, make_image):
        original = make_image(1)
        collection = [original]

        rate(collection, 1, "alice", Vote.GOOD)

        assert collection[0] is original
        assert original.user_ratings == {}
        assert original.ratings == Ratings()

    def test_other_images_untouched(self, make_image):
        other = make_image(2, good=5)

        result = rate([make_image(1), other], 1, "alice", Vote.GOOD)

        assert result[1] is other

    def test_invalid_vote(self, make_image):
        with pytest.raises(ValueError):
            rate([make_image(1)], 1, "alice", "meh")

    def test_apply_vote_on_single_image(self, make_image):
        image = apply_vote(make_image(1), "bob", Vote.CAN_IMPROVE)
        assert image.ratings == Ratings(good=0, can_improve=1)


class TestVoterKey:
    def test_voter_key_for_user(self, alice):
        assert voter_key_for(alice) == "alice"

    def test_voter_key_without_user(self):
        assert voter_key_for(None) == ANONYMOUS_VOTER == "anonymous"

    def test_anonymous_votes_share_one_slot(self, make_image):
        collection = rate([make_image(1)], 1, voter_key_for(None), Vote.GOOD)
        collection = rate(collection, 1, voter_key_for(None), Vote.GOOD)

        assert collection[0].ratings.good == 1


class TestView:
    """Test view counting."""

    def test_three_views(self, make_image):
        collection = [make_image(1)]

        for _ in range(3):
            collection = view(collection, 1)

        assert collection[0].views == 3

    def test_view_unknown_image(self, make_image):
        collection = [make_image(1, views=4)]
        assert view(collection, 2) == collection

    def test_view_does_not_mutate(self, make_image):
        original = make_image(1)
        view([original], 1)
        assert original.views == 0

    def test_author_views_count(self, make_image):
        author = UserProfile.create_new("bob")
        collection = [make_image(1, author=author.nickname)]
        assert view(collection, 1)[0].views == 1
