"""FastAPI application factory."""

from fastapi import FastAPI

from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware


def create_app(registry, config) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        registry: ImageRegistry instance (may be attached later via
            ``app.state.registry``, e.g. in a lifespan handler)
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Drive Image Registry",
        description="Register Google Drive share links and serve them as direct-view URLs",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.state.registry = registry
    app.state.config = config

    app.add_middleware(LoggingMiddleware)

    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
