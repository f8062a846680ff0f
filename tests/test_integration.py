"""Integration tests for the image registry."""

from fastapi.testclient import TestClient

from config import Config
from drive_images.registry import build_registry
from drive_images.common.logging_config import setup_logging
from web_app import create_app


class TestIntegration:
    """End-to-end integration tests."""

    def test_full_image_lifecycle(self, tmp_path):
        """Register, render, reload from disk and delete an image."""
        logger = setup_logging(level="DEBUG")
        config = Config(storage_path=str(tmp_path / "images.json"))

        registry = build_registry(config, logger=logger)
        app = create_app(registry=registry, config=config)

        with TestClient(app) as client:
            # 1. Register via API
            response = client.post(
                "/api/images",
                json={"raw": "https://drive.google.com/file/d/1AbC-23xYz/view?usp=sharing"},
            )
            assert response.status_code == 201
            key = response.json()["key"]
            assert key == "https-drive-google-com-file-d-1abc-23xyz-view-usp-sharing"

            # 2. Bulk import through the admin form
            response = client.post("/import", data={"bulk": "ID1\nID2\n\nID3"})
            assert response.status_code == 200

            # 3. Render a shortcode
            response = client.post("/api/render", json={"text": f'[gdrive_image_url key="{key}"]'})
            assert response.json()["html"] == "https://drive.google.com/uc?export=view&amp;id=1AbC-23xYz"

        # 4. A fresh registry over the same file sees everything
        reopened = build_registry(config, logger=logger)
        assert reopened.keys() == [key, "id1", "id2", "id3"]
        assert reopened.get_url(key) == "https://drive.google.com/uc?export=view&id=1AbC-23xYz"

        # 5. Delete and confirm via the other instance
        assert reopened.delete("id2") is True
        assert "id2" not in registry
        assert len(registry) == 3
