"""Middleware for the image registry web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
