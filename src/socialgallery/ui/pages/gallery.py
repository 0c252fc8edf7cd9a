"""Gallery page for socialgallery application."""

import streamlit as st
import structlog

from socialgallery.services.feed import FeedFilter
from socialgallery.ui.components.common import render_empty_state, render_error_message
from socialgallery.ui.components.gallery import render_feed_controls, render_image_dialog, render_image_grid
from socialgallery.ui.components.upload import render_upload_form
from socialgallery.ui.handlers.gallery import get_current_user, get_feed, get_images

logger = structlog.get_logger(__name__)


def render_gallery_page() -> None:
    """Render the feed, or the upload form while an upload is in progress."""
    user = get_current_user(st.session_state)

    if st.session_state.get("show_upload"):
        render_upload_form()
        return

    try:
        render_feed_controls()
        st.divider()

        images = get_feed(st.session_state)

        if not images:
            if st.session_state.get("feed_filter") == FeedFilter.MY_IMAGES.value:
                render_empty_state(
                    title="Aún no has subido imágenes",
                    description="¡Sube tu primera imagen y compártela con la comunidad!",
                )
            else:
                render_empty_state(
                    title="No hay imágenes para mostrar",
                    description="Sé el primero en compartir una imagen increíble",
                )
            return

        render_image_grid(images, user)

        viewing_image_id = st.session_state.pop("viewing_image_id", None)
        if viewing_image_id is not None:
            viewed = next((image for image in get_images(st.session_state) if image.id == viewing_image_id), None)
            if viewed is not None:
                render_image_dialog(viewed)

    except Exception as e:
        logger.error("gallery_page_error", error=str(e))
        render_error_message("Error de galería", "No se pudo mostrar la galería.", str(e))
