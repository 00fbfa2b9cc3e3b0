"""Web interface routes implementation."""

import os
from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool

from quicklink.common.logging_config import get_logger
from ..links import short_url_for
from ..qr import render_qr_png

logger = get_logger("web")

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "..", "ux", "web")

QR_CACHE_CONTROL = "public, max-age=3600"


def _not_found(short_code: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Short code '{short_code}' not found",
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the homepage."""
    html_file = os.path.join(template_dir, "index.html")

    if os.path.exists(html_file):
        with open(html_file, "r", encoding="utf-8") as f:
            return HTMLResponse(content=f.read())

    return HTMLResponse(
        content="<h1>QuickLink</h1><p>POST JSON {\"url\": ...} to /shorten</p>",
        status_code=200,
    )


@router.get("/qr/{short_code}", include_in_schema=False)
async def qr_code(request: Request, short_code: str):
    """Serve a PNG QR code that encodes the short URL."""
    service = request.app.state.service
    config = request.app.state.config

    if not service.url_exists(short_code):
        logger.info(f"Short code not found for QR: {short_code}")
        raise _not_found(short_code)

    short_url = short_url_for(request, short_code)
    png = await run_in_threadpool(render_qr_png, short_url, config.qr_size)

    logger.info(f"QR code generated for: {short_code}")
    return Response(
        content=png,
        media_type="image/png",
        headers={"Cache-Control": QR_CACHE_CONTROL},
    )


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL."""
    service = request.app.state.service

    original_url = service.get_original_url(short_code)

    if not original_url:
        raise _not_found(short_code)

    logger.info(f"Redirected: {short_code} -> {original_url}")
    return RedirectResponse(url=original_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)
