"""Admin page and shortcode-style lookup routes."""

from .routes import router as web_router

__all__ = ["web_router"]
