"""Tests for the upload form's image picker."""

from unittest.mock import MagicMock, patch

from socialgallery.ui.components.upload import render_image_picker


@patch("socialgallery.ui.components.upload.st")
def test_picker_does_not_filter_extensions(mock_st):
    """Test that every file reaches intake, which accepts any image/* type."""
    mock_st.session_state = {}
    mock_st.file_uploader.return_value = None

    render_image_picker()

    mock_st.file_uploader.assert_called_once()
    assert mock_st.file_uploader.call_args.kwargs.get("type") is None
    assert mock_st.file_uploader.call_args.kwargs["key"] == "upload_file_0"


@patch("socialgallery.ui.components.upload.handle_file_select")
@patch("socialgallery.ui.components.upload.st")
def test_picked_file_goes_to_intake(mock_st, mock_handle_file_select):
    uploaded_file = MagicMock()
    mock_st.session_state = {}
    mock_st.file_uploader.return_value = uploaded_file

    render_image_picker()

    mock_handle_file_select.assert_called_once_with(mock_st.session_state, uploaded_file)
    mock_st.rerun.assert_called_once()
