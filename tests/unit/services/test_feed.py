"""Tests for feed projection."""

from datetime import UTC, datetime

from socialgallery.models.user import UserProfile
from socialgallery.services.feed import FeedFilter, SortKey, filter_images, project, sort_images


def ids(images):
    return [image.id for image in images]


class TestFilters:
    """Test feed filters."""

    def test_all_is_identity(self, make_image):
        collection = [make_image(1), make_image(2)]
        assert ids(filter_images(collection, FeedFilter.ALL, None)) == [1, 2]

    def test_my_images(self, make_image, alice):
        collection = [make_image(1, author="alice"), make_image(2, author="bob"), make_image(3, author="alice")]
        assert ids(filter_images(collection, "my-images", alice)) == [1, 3]

    def test_my_images_without_user_is_empty(self, make_image):
        assert filter_images([make_image(1, author="alice")], FeedFilter.MY_IMAGES, None) == []

    def test_top_rated_is_strict(self, make_image):
        collection = [
            make_image(1, good=3, can_improve=1),
            make_image(2, good=2, can_improve=2),
            make_image(3, good=0, can_improve=1),
            make_image(4, good=1, can_improve=0),
        ]

        result = filter_images(collection, FeedFilter.TOP_RATED, None)

        assert ids(result) == [1, 4]
        assert all(image.ratings.good > image.ratings.can_improve for image in result)

    def test_unknown_filter_keeps_everything(self, make_image):
        assert ids(filter_images([make_image(1)], "favourites", None)) == [1]


class TestSorting:
    """Test feed ordering."""

    def test_newest_and_oldest(self, make_image):
        collection = [make_image(1, day=5), make_image(2, day=9), make_image(3, day=1)]

        assert ids(sort_images(collection, SortKey.NEWEST)) == [2, 1, 3]
        assert ids(sort_images(collection, "oldest")) == [3, 1, 2]

    def test_most_liked(self, make_image):
        collection = [make_image(1, good=1), make_image(2, good=7), make_image(3, good=3)]
        assert ids(sort_images(collection, SortKey.MOST_LIKED)) == [2, 3, 1]

    def test_most_viewed_is_non_increasing(self, make_image):
        collection = [make_image(i, views=v) for i, v in enumerate([3, 10, 0, 10, 7])]

        views = [image.views for image in sort_images(collection, SortKey.MOST_VIEWED)]

        assert views == sorted(views, reverse=True)

    def test_ties_keep_prior_order(self, make_image):
        collection = [make_image(1, good=2), make_image(2, good=5), make_image(3, good=2), make_image(4, good=5)]

        assert ids(sort_images(collection, SortKey.MOST_LIKED)) == [2, 4, 1, 3]

    def test_newest_ties_keep_prior_order(self, make_image):
        collection = [make_image(1, day=3), make_image(2, day=3), make_image(3, day=3)]
        assert ids(sort_images(collection, SortKey.NEWEST)) == [1, 2, 3]

    def test_unknown_sort_key_is_identity(self, make_image):
        collection = [make_image(1, day=1), make_image(2, day=9)]
        assert ids(sort_images(collection, "random")) == [1, 2]


class TestProject:
    """Test the combined projection."""

    def test_empty_collection(self, alice):
        for feed_filter in FeedFilter:
            for sort_key in SortKey:
                assert project([], feed_filter, sort_key, alice) == []

    def test_filter_then_sort(self, make_image, alice):
        collection = [
            make_image(1, author="alice", views=2),
            make_image(2, author="bob", views=50),
            make_image(3, author="alice", views=9),
        ]

        assert ids(project(collection, FeedFilter.MY_IMAGES, SortKey.MOST_VIEWED, alice)) == [3, 1]

    def test_project_does_not_reorder_input(self, make_image):
        collection = [make_image(1, day=1), make_image(2, day=2)]

        project(collection, FeedFilter.ALL, SortKey.NEWEST, None)

        assert ids(collection) == [1, 2]

    def test_newest_across_loaded_and_new_images(self, make_image):
        """Test newest ordering between a loaded image and a freshly published one."""
        loaded = make_image(1, day=1)
        fresh = make_image(2)
        fresh.upload_date = datetime(2024, 6, 1, tzinfo=UTC)

        assert ids(project([loaded, fresh], "all", "newest", UserProfile.create_new("x"))) == [2, 1]

    def test_labels(self):
        assert FeedFilter.TOP_RATED.label == "Mejor Calificadas"
        assert SortKey.MOST_VIEWED.label == "Más Vistas"
