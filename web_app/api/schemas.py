"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class AddImageRequest(BaseModel):
    """Request to register a single image."""

    raw: str = Field(..., description="Drive share URL or file ID", max_length=4096)
    title: Optional[str] = Field(None, description="Optional friendly title", max_length=512)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "raw": "https://drive.google.com/file/d/1AbC-23xYz/view?usp=sharing",
                    "title": "Sunset"
                },
                {
                    "raw": "1AbC-23xYzQ9",
                    "title": None
                }
            ]
        }
    }


class BulkImportRequest(BaseModel):
    """Request to register one image per line."""

    text: str = Field(..., description="Drive share URLs or file IDs, one per line")


class BulkImportResponse(BaseModel):
    """Response after a bulk import."""

    inserted: int = Field(..., description="Number of records inserted")


class ImageResponse(BaseModel):
    """A registered image."""

    key: str = Field(..., description="Stable key used by renderers")
    title: str
    raw: str = Field(..., description="Input as submitted")
    url: str = Field(..., description="Normalized direct-view URL")
    created: datetime

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "key": "sunset",
                    "title": "Sunset",
                    "raw": "https://drive.google.com/file/d/1AbC-23xYz/view?usp=sharing",
                    "url": "https://drive.google.com/uc?export=view&id=1AbC-23xYz",
                    "created": "2024-01-01T12:00:00Z"
                }
            ]
        }
    }


class DeleteResponse(BaseModel):
    """Response after a delete."""

    key: str
    deleted: bool = Field(..., description="False when the key was not registered")


class NormalizeResponse(BaseModel):
    """Normalization preview."""

    raw: str
    url: str
    file_id: Optional[str] = Field(None, description="Drive file ID, if one was recognized")


class RenderRequest(BaseModel):
    """Content containing image shortcodes."""

    text: str


class RenderResponse(BaseModel):
    """Content with shortcodes expanded."""

    html: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    storage: str = Field(..., description="Storage status")
    images: int = Field(..., description="Number of registered images")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")
