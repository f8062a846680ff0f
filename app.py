#!/usr/bin/env python3
"""
Main entry point for the Drive image registry service.

Concurrency: the registry does a full load/modify/save on every write and has
no locking of its own, so the server runs a single worker process. Route
handlers are synchronous and run in the FastAPI threadpool; keep admin writes
on one client at a time.

Usage:
    python app.py

Environment variables (prefix GDRIVE_IMAGES_):
    GDRIVE_IMAGES_STORAGE_PATH - JSON file holding the registry
    GDRIVE_IMAGES_REDIS_URL - Redis connection URL (optional, replaces the file)
    GDRIVE_IMAGES_OPTION_KEY - Name of the stored registry blob
    GDRIVE_IMAGES_HOST / GDRIVE_IMAGES_PORT - Address to listen on
    GDRIVE_IMAGES_LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from drive_images.registry import build_registry
from drive_images.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting Drive image registry...")

    if config.redis_url:
        logger.info(f"Storing registry in Redis at {config.redis_url}")
    else:
        logger.info(f"Storing registry in {config.storage_path}")

    registry = build_registry(config, logger=logger)
    app.state.registry = registry

    logger.info(f"Service started with {len(registry)} images")

    yield

    logger.info("Shutting down Drive image registry...")
    registry.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Drive Image Registry Service")
    logger.info(f"Configuration: {config.model_dump()}")

    app = create_app(registry=None, config=config)
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=1,
        log_level=config.log_level.lower(),
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
