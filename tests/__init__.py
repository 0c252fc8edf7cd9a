"""
Test suite for socialgallery application.

This module contains all test cases for the application:
- Unit tests for models, services and UI handlers
- Integration tests running the full intent flow against DuckDB
"""
