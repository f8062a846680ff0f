"""API routes implementation."""

from typing import List

from fastapi import APIRouter, Query, Request, HTTPException, status
from datetime import datetime, timezone

from .schemas import (
    AddImageRequest,
    BulkImportRequest,
    BulkImportResponse,
    ImageResponse,
    DeleteResponse,
    NormalizeResponse,
    RenderRequest,
    RenderResponse,
    HealthResponse,
    ErrorResponse,
)
from drive_images.exceptions import EmptyInputError
from drive_images.normalizer import normalize, extract_file_id
from drive_images.common.shortcodes import expand_shortcodes

router = APIRouter()


def _to_response(record) -> ImageResponse:
    return ImageResponse(
        key=record.key,
        title=record.title,
        raw=record.raw,
        url=record.url,
        created=record.created,
    )


@router.get(
    "/images",
    response_model=List[ImageResponse],
    summary="List images",
    description="List registered images in insertion order.",
)
def list_images(request: Request):
    """List registered images."""
    registry = request.app.state.registry
    return [_to_response(record) for record in registry.list()]


@router.post(
    "/images",
    response_model=ImageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing image URL or file ID"},
    },
    summary="Register image",
    description="Register a Drive share link or file ID. The key is derived from the title (or the raw input).",
)
def add_image(request: Request, body: AddImageRequest):
    """Register a single image."""
    registry = request.app.state.registry

    try:
        key = registry.add(body.raw, title=body.title)
    except EmptyInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )

    return _to_response(registry.get(key))


@router.post(
    "/images/bulk",
    response_model=BulkImportResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Empty import text"},
    },
    summary="Bulk import images",
    description="Register one Drive share link or file ID per line. Blank lines are skipped.",
)
def bulk_import(request: Request, body: BulkImportRequest):
    """Register one image per line."""
    registry = request.app.state.registry

    try:
        inserted = registry.bulk_import(body.text)
    except EmptyInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )

    return BulkImportResponse(inserted=inserted)


@router.get(
    "/images/{key}",
    response_model=ImageResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Key not found"},
    },
    summary="Get image",
)
def get_image(request: Request, key: str):
    """Get a registered image by key."""
    record = request.app.state.registry.get(key)

    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Image '{key}' not found",
        )

    return _to_response(record)


@router.delete(
    "/images/{key}",
    response_model=DeleteResponse,
    summary="Delete image",
    description="Delete an image. Deleting an unknown key is not an error; `deleted` is false.",
)
def delete_image(request: Request, key: str):
    """Delete a registered image."""
    deleted = request.app.state.registry.delete(key)
    return DeleteResponse(key=key, deleted=deleted)


@router.get(
    "/normalize",
    response_model=NormalizeResponse,
    summary="Preview normalization",
    description="Show the direct-view URL a share link or file ID would be stored as, without registering it.",
)
def normalize_preview(raw: str = Query(..., description="Drive share URL or file ID")):
    """Preview normalization of a raw input."""
    return NormalizeResponse(
        raw=raw,
        url=normalize(raw),
        file_id=extract_file_id(raw),
    )


@router.post(
    "/render",
    response_model=RenderResponse,
    summary="Expand shortcodes",
    description='Expand `[gdrive_image key="..."]` and `[gdrive_image_url key="..."]` shortcodes in content.',
)
def render_content(request: Request, body: RenderRequest):
    """Expand image shortcodes in content."""
    registry = request.app.state.registry
    return RenderResponse(html=expand_shortcodes(body.text, registry))


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the registry storage is reachable.",
)
def health_check(request: Request):
    """Health check endpoint for monitoring."""
    registry = request.app.state.registry

    healthy = registry.health_check()
    images = len(registry) if healthy else 0

    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        storage="healthy" if healthy else "unhealthy",
        images=images,
        timestamp=datetime.now(timezone.utc),
    )
