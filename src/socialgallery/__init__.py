"""
socialgallery - Shared image gallery web application with Streamlit

A small social gallery where visitors pick a nickname and can:
- Upload images with a title and description
- Rate images as "good" or "can improve"
- Browse a shared feed filtered and sorted by date, likes or views
- Keep everything in a local DuckDB key-value store
"""

__version__ = "0.1.0"
__author__ = "socialgallery"
__description__ = "Shared image gallery web application with Streamlit"
