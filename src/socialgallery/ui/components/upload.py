"""Upload form components for socialgallery application."""

import streamlit as st
import structlog

from socialgallery.services.upload import can_publish
from socialgallery.ui.components.gallery import image_source
from socialgallery.ui.handlers.error import GalleryError
from socialgallery.ui.handlers.gallery import clear_upload_session_state, handle_file_select, handle_publish_image

logger = structlog.get_logger(__name__)


def _publish() -> None:
    handle_publish_image(
        st.session_state,
        st.session_state.get("image_title", ""),
        st.session_state.get("image_description", ""),
    )


def _cancel() -> None:
    logger.debug("upload_cancelled")
    clear_upload_session_state(st.session_state)


def _remove_pending_image() -> None:
    st.session_state.pending_image = None
    st.session_state.upload_nonce = st.session_state.get("upload_nonce", 0) + 1


def render_image_picker() -> None:
    """Render the file picker, or the preview once an image was accepted."""
    pending_image = st.session_state.get("pending_image")

    if pending_image is not None:
        st.image(
            image_source(pending_image.preview_url),
            caption=pending_image.filename or None,
            use_container_width=True,
        )
        st.button("Cambiar imagen", on_click=_remove_pending_image)
        return

    uploaded_file = st.file_uploader(
        "Arrastra tu imagen aquí o haz clic para seleccionar",
        key=f"upload_file_{st.session_state.get('upload_nonce', 0)}",
    )

    if uploaded_file is not None:
        try:
            handle_file_select(st.session_state, uploaded_file)
            st.rerun()
        except GalleryError as e:
            st.error(e.user_message)


def render_upload_form() -> None:
    """Render the complete upload form: picker, title, description and actions."""
    st.markdown("## Subir Nueva Imagen")

    st.markdown("**Selecciona tu imagen**")
    render_image_picker()

    st.text_input("Título *", placeholder="Dale un título atractivo a tu imagen...", key="image_title")
    st.text_area("Descripción", placeholder="Cuéntanos sobre tu imagen...", height=100, key="image_description")

    ready = can_publish(st.session_state.get("pending_image"), st.session_state.get("image_title"))

    col1, col2 = st.columns(2)
    with col1:
        st.button("Cancelar", use_container_width=True, on_click=_cancel)
    with col2:
        st.button("Publicar Imagen", use_container_width=True, type="primary", disabled=not ready, on_click=_publish)
