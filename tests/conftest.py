"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from config import Config
from drive_images.keygen import KeyGenerator
from drive_images.registry import ImageRegistry
from drive_images.store import MemoryStore, JSONFileStore
from drive_images.common.logging_config import setup_logging
from web_app import create_app

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    """Creation time stamped by the test registries."""
    return FIXED_NOW


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def key_generator():
    """Key generator with a frozen clock for timestamp fallback keys."""
    return KeyGenerator(time_func=lambda: 1700000000)


@pytest.fixture
def memory_store(logger):
    """Create in-memory store."""
    return MemoryStore(logger=logger)


@pytest.fixture
def registry(memory_store, key_generator, logger):
    """Create registry over the in-memory store."""
    return ImageRegistry(
        store=memory_store,
        key_generator=key_generator,
        logger=logger,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def registry_path(tmp_path):
    """Location for a JSON registry file."""
    return str(tmp_path / "data" / "images.json")


@pytest.fixture
def file_registry(registry_path, key_generator, logger):
    """Create registry over a JSON file store."""
    return ImageRegistry(
        store=JSONFileStore(registry_path, logger=logger),
        key_generator=key_generator,
        logger=logger,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def config(registry_path):
    """Configuration pointing at a temporary registry file."""
    return Config(storage_path=registry_path, redis_url=None)


@pytest.fixture
def app(registry, config):
    """Create test FastAPI app."""
    return create_app(registry=registry, config=config)


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def sample_links():
    """Sample Drive inputs and their file IDs."""
    return {
        "https://drive.google.com/file/d/1AbC-23xYz/view?usp=sharing": "1AbC-23xYz",
        "https://drive.google.com/open?id=0B7_abcDEF12": "0B7_abcDEF12",
        "https://drive.google.com/drive/folders/d/XyZ987_-qq": "XyZ987_-qq",
        "1AbCdEfGhIjK": "1AbCdEfGhIjK",
    }
