"""
Pytest configuration and shared fixtures.

This file provides common fixtures and configuration for all tests.

Decision: No custom event_loop fixture. pytest-asyncio handles it with
asyncio_mode = "auto" configured in pyproject.toml.
"""

import os

# Set test environment variables
# Use .setdefault() to respect values already set by docker-compose or other sources
os.environ.setdefault("DATABASE_HOST", "localhost")
os.environ.setdefault("DATABASE_PORT", "5432")
os.environ.setdefault("DATABASE_NAME", "test_newsletter")
os.environ.setdefault("DATABASE_USER", "postgres")
os.environ.setdefault("DATABASE_PASSWORD", "postgres")
os.environ.setdefault("SMTP_HOST", "localhost")
os.environ.setdefault("APPLICATION_BASE_URL", "http://testserver")
os.environ.setdefault("LOG_LEVEL", "ERROR")
