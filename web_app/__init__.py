"""Web layer for the image registry: admin page, JSON API and lookup routes."""

from .app_factory import create_app

__all__ = ["create_app"]
