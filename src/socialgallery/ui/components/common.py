"""Reusable UI components for socialgallery application."""

import streamlit as st
import structlog

from socialgallery.models.user import UserProfile
from socialgallery.ui.handlers.gallery import handle_sign_out

logger = structlog.get_logger()


def render_empty_state(title: str, description: str, icon: str = "🎨") -> None:
    """
    Render an empty state message.

    Args:
        title: Main title for the empty state
        description: Description text
        icon: Emoji icon to display
    """
    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        st.markdown(
            f"""
        <div style='text-align: center; padding: 2rem 0;'>
            <div style='font-size: 4rem; margin-bottom: 1rem;'>{icon}</div>
            <h3 style='color: #666; margin-bottom: 1rem;'>{title}</h3>
            <p style='color: #888; margin-bottom: 2rem;'>{description}</p>
        </div>
        """,
            unsafe_allow_html=True,
        )


def render_error_message(error_type: str, message: str, details: str | None = None) -> None:
    """
    Render a standardized error message.

    Args:
        error_type: Short error heading
        message: Main error message
        details: Additional error details (optional)
    """
    st.error(f"**{error_type}:** {message}")

    if details:
        with st.expander("🔍 Detalles del error"):
            st.code(details)


def render_header(user: UserProfile) -> None:
    """Render the application header with the upload button."""
    col1, col2 = st.columns([3, 1])

    with col1:
        st.markdown("# 📸 Galería Social")
        st.caption(f"¡Hola, {user.nickname}!")

    with col2:
        st.caption(f"Has subido {user.uploads_count} imágenes")
        if st.button("📷 Subir Imagen", use_container_width=True, type="primary"):
            st.session_state.show_upload = True

    st.divider()


def render_sidebar(user: UserProfile) -> None:
    """Render the sidebar with the active profile."""
    with st.sidebar:
        st.markdown("### 📸 Galería Social")
        st.divider()

        st.subheader(f"👤 {user.nickname}")
        st.caption(f"Miembro desde {user.join_date.strftime('%Y-%m-%d')}")
        st.metric("Imágenes subidas", user.uploads_count)

        st.divider()

        if st.button("🔄 Cambiar sobrenombre", use_container_width=True):
            logger.info("sign_out_requested", nickname=user.nickname)
            handle_sign_out(st.session_state)
            st.rerun()
