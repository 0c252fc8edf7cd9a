"""
Basic tests to verify test environment setup.
"""

import pytest

from socialgallery import __description__, __version__


def test_version() -> None:
    """Test that version is defined."""
    assert __version__ == "0.1.0"


def test_description() -> None:
    """Test that description is defined."""
    assert __description__ == "Shared image gallery web application with Streamlit"


@pytest.mark.unit
def test_unit_marker() -> None:
    """Test that unit marker works."""
    assert True


def test_sample_fixtures(alice, sample_jpeg_data: bytes) -> None:
    """Test that fixtures are working."""
    assert alice.nickname == "alice"
    assert sample_jpeg_data[:2] == b"\xff\xd8"
