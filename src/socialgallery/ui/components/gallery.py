"""Gallery components for socialgallery application."""

import base64
import binascii

import streamlit as st
import structlog

from socialgallery.models.image import GalleryImage, Vote
from socialgallery.models.user import UserProfile
from socialgallery.services.feed import FeedFilter, SortKey
from socialgallery.ui.handlers.gallery import handle_rate_image, handle_view_image

logger = structlog.get_logger(__name__)

COLS_PER_ROW = 3


def image_source(image_url: str) -> str | bytes:
    """
    Return something ``st.image`` can display.

    Inline ``data:`` URLs are decoded to raw bytes; remote URLs are passed
    through unchanged.
    """
    if not image_url.startswith("data:"):
        return image_url

    header, _, payload = image_url.partition(",")
    if not header.endswith(";base64"):
        return image_url

    try:
        return base64.b64decode(payload)
    except (binascii.Error, ValueError):
        logger.warning("invalid_data_url", prefix=header)
        return image_url


def _select_filter(feed_filter: FeedFilter) -> None:
    st.session_state.feed_filter = feed_filter.value


def _open_image(image_id: int) -> None:
    handle_view_image(st.session_state, image_id)
    st.session_state.viewing_image_id = image_id


def render_feed_controls() -> None:
    """Render the filter buttons and the sort selector."""
    current_filter = st.session_state.get("feed_filter", FeedFilter.ALL.value)

    filter_cols = st.columns(len(FeedFilter) + 1)
    for col, feed_filter in zip(filter_cols, FeedFilter):
        with col:
            st.button(
                feed_filter.label,
                key=f"filter_{feed_filter.value}",
                use_container_width=True,
                type="primary" if feed_filter.value == current_filter else "secondary",
                on_click=_select_filter,
                args=(feed_filter,),
            )

    with filter_cols[-1]:
        sort_values = [sort_key.value for sort_key in SortKey]
        st.selectbox(
            "Ordenar por:",
            sort_values,
            format_func=lambda value: SortKey(value).label,
            key="sort_key",
        )


def render_image_grid(images: list[GalleryImage], user: UserProfile | None) -> None:
    """
    Render images in a grid of cards.

    Args:
        images: Feed to display, already filtered and sorted
        user: Active profile, used to highlight its votes
    """
    for i in range(0, len(images), COLS_PER_ROW):
        cols = st.columns(COLS_PER_ROW)
        for col, image in zip(cols, images[i : i + COLS_PER_ROW]):
            with col:
                render_image_card(image, user)


def render_image_card(image: GalleryImage, user: UserProfile | None) -> None:
    """Render one image with its stats and vote buttons."""
    user_vote = image.vote_of(user.nickname) if user else None

    with st.container(border=True):
        st.image(image_source(image.image_url), use_container_width=True)
        st.button(
            f"👁️ {image.views}",
            key=f"view_{image.id}",
            help="Ver imagen",
            on_click=_open_image,
            args=(image.id,),
        )

        st.markdown(f"### {image.title}")
        if image.description:
            st.write(image.description)
        st.caption(f"👤 {image.author} · 🕒 {image.upload_date.strftime('%Y-%m-%d')}")

        col1, col2 = st.columns(2)
        with col1:
            st.caption("Calificación")
        with col2:
            st.caption(f"{image.total_ratings} votos")
        st.progress(int(round(image.positive_percentage)))
        st.caption(f"👍 {image.ratings.good} · 👎 {image.ratings.can_improve}")

        col1, col2 = st.columns(2)
        with col1:
            st.button(
                "👍 Buena",
                key=f"rate_good_{image.id}",
                use_container_width=True,
                type="primary" if user_vote == Vote.GOOD else "secondary",
                on_click=handle_rate_image,
                args=(st.session_state, image.id, Vote.GOOD),
            )
        with col2:
            st.button(
                "👎 Puede mejorar",
                key=f"rate_improve_{image.id}",
                use_container_width=True,
                type="primary" if user_vote == Vote.CAN_IMPROVE else "secondary",
                on_click=handle_rate_image,
                args=(st.session_state, image.id, Vote.CAN_IMPROVE),
            )


@st.dialog(title="Imagen", width="large")
def render_image_dialog(image: GalleryImage) -> None:
    """Show one image at full size."""
    st.image(image_source(image.image_url), use_container_width=True)
    st.markdown(f"### {image.title}")
    if image.description:
        st.write(image.description)
    st.caption(
        f"👤 {image.author} · 👁️ {image.views} · 👍 {image.ratings.good} · 👎 {image.ratings.can_improve}"
    )
