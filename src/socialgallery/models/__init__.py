"""
Models module for socialgallery application.

This module contains data models and schemas:
- UserProfile: The visitor's nickname, join date and upload count
- GalleryImage, Ratings, Vote: Published images and their votes
- DatabaseManager: DuckDB connection and key-value schema management
"""

from .database import DatabaseManager, get_database_manager
from .image import GalleryImage, Ratings, Vote
from .schema import get_schema_statements, validate_schema_compatibility
from .user import UserProfile

__all__ = [
    "GalleryImage",
    "Ratings",
    "Vote",
    "UserProfile",
    "DatabaseManager",
    "get_database_manager",
    "get_schema_statements",
    "validate_schema_compatibility",
]
