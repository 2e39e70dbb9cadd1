"""
Back-office API package.

Provides the FastAPI application for back-office administration.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
