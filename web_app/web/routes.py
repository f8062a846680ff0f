"""Admin page and shortcode-style lookup routes."""

import os
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Request, Form, HTTPException, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from drive_images.exceptions import EmptyInputError
from drive_images.common.shortcodes import render_image_tag
from drive_images.common.validators import safe_url

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "templates")
templates = Jinja2Templates(directory=template_dir)
templates.env.filters["safe_url"] = safe_url


def _render_admin(
    request: Request,
    message: Optional[str] = None,
    level: str = "updated",
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    registry = request.app.state.registry
    return templates.TemplateResponse(
        request,
        "admin.html",
        {
            "images": registry.list(),
            "message": message,
            "level": level,
        },
        status_code=status_code,
    )


def _redirect_home(message: str) -> RedirectResponse:
    """Redirect after POST so a reload does not resubmit the form."""
    return RedirectResponse(
        url="./?" + urlencode({"message": message}),
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def admin_page(request: Request, message: Optional[str] = None):
    """Show the add/import forms and the table of stored images."""
    return _render_admin(request, message=message)


@router.post("/add", response_class=HTMLResponse, include_in_schema=False)
def add_image_web(
    request: Request,
    raw: str = Form(""),
    title: str = Form(""),
):
    """Handle the single image form."""
    registry = request.app.state.registry

    try:
        registry.add(raw, title=title or None)
    except EmptyInputError as e:
        return _render_admin(
            request,
            message=e.message,
            level="error",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    return _redirect_home("Image added.")


@router.post("/import", response_class=HTMLResponse, include_in_schema=False)
def import_images_web(request: Request, bulk: str = Form("")):
    """Handle the bulk import form."""
    registry = request.app.state.registry

    try:
        inserted = registry.bulk_import(bulk)
    except EmptyInputError as e:
        return _render_admin(
            request,
            message=e.message,
            level="error",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    return _redirect_home(f"Imported {inserted} images.")


@router.post("/delete", response_class=HTMLResponse, include_in_schema=False)
def delete_image_web(request: Request, key: str = Form("")):
    """Handle the per-row delete button."""
    registry = request.app.state.registry

    if registry.delete(key.strip()):
        return _redirect_home("Image removed.")
    return _redirect_home(f"No image with key '{key}'.")


@router.get("/img/{key}", response_class=HTMLResponse, include_in_schema=False)
def image_markup(request: Request, key: str, alt: Optional[str] = None, css_class: Optional[str] = None):
    """Render ``<img>`` markup for a key (the ``gdrive_image`` shortcode)."""
    record = request.app.state.registry.get(key)

    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Image '{key}' not found",
        )

    return HTMLResponse(content=render_image_tag(record, alt=alt, css_class=css_class))


@router.get("/url/{key}", response_class=PlainTextResponse, include_in_schema=False)
def image_url(request: Request, key: str):
    """Return the direct-view URL for a key (the ``gdrive_image_url`` shortcode)."""
    url = request.app.state.registry.get_url(key)

    if url is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Image '{key}' not found",
        )

    return PlainTextResponse(content=url)
