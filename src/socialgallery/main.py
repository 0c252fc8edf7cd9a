"""
Main Streamlit application for socialgallery.

This is the entry point for the gallery web application:

    streamlit run src/socialgallery/main.py
"""

import streamlit as st
from streamlit.runtime.scriptrunner_utils.exceptions import RerunException

from socialgallery.config import get_debug_mode
from socialgallery.logging_config import configure_structured_logging, get_logger
from socialgallery.ui.components.common import render_error_message, render_header, render_sidebar
from socialgallery.ui.handlers.error import handle_error
from socialgallery.ui.handlers.gallery import get_current_user, initialize_gallery_state
from socialgallery.ui.pages.gallery import render_gallery_page
from socialgallery.ui.pages.login import render_login_page

configure_structured_logging()
logger = get_logger(__name__)


def render_main_content() -> None:
    """Render the nickname page until a user is set, then the gallery."""
    user = get_current_user(st.session_state)

    if user is None:
        render_login_page()
        return

    render_header(user)
    render_sidebar(user)
    render_gallery_page()


def main() -> None:
    """Main application entry point."""
    st.set_page_config(
        page_title="Galería Social",
        page_icon="📸",
        layout="wide",
        menu_items={
            "Get Help": None,
            "Report a bug": None,
            "About": "Galería Social - comparte y califica imágenes",
        },
    )

    try:
        initialize_gallery_state(st.session_state)
        render_main_content()

        if get_debug_mode():
            with st.expander("Debug Info"):
                st.write(
                    {
                        "user": st.session_state.get("user"),
                        "image_count": len(st.session_state.get("images") or []),
                        "feed_filter": st.session_state.get("feed_filter"),
                        "sort_key": st.session_state.get("sort_key"),
                    }
                )

    except RerunException:
        raise
    except Exception as e:
        error_info = handle_error(e, {"operation": "main_application"})
        logger.error("critical_application_error", error=str(e), code=error_info.code)
        render_error_message("Error", error_info.user_message, str(e))

        if st.button("🔄 Reiniciar la aplicación", type="primary"):
            st.rerun()


if __name__ == "__main__":
    main()
