"""Nickname page for socialgallery application."""

import streamlit as st

from socialgallery.ui.handlers.error import ValidationError
from socialgallery.ui.handlers.gallery import handle_set_user


def render_login_page() -> None:
    """Ask for a nickname; no registration or password is involved."""
    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        st.markdown(
            """
        <div style='text-align: center; padding: 1rem 0;'>
            <div style='font-size: 4rem;'>📸</div>
            <h1>Galería Social</h1>
            <p style='color: #666;'>Comparte tus mejores fotos y descubre increíbles imágenes</p>
        </div>
        """,
            unsafe_allow_html=True,
        )

        with st.form("nickname_form"):
            nickname = st.text_input("Elige tu sobrenombre", placeholder="Ej: FotoMaster, ArteLover...")
            submitted = st.form_submit_button("Entrar a la Galería", use_container_width=True, type="primary")

        if submitted:
            try:
                handle_set_user(st.session_state, nickname)
                st.rerun()
            except ValidationError as e:
                st.warning(e.user_message)

        st.caption("✨ No necesitas registro · 📷 Sube y califica imágenes · 🎨 Descubre arte increíble")
