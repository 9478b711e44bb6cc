from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from ..services.html import TemplateError

logger = logging.getLogger(__name__)

router = APIRouter()

LANDING_TEMPLATE = "index.html"


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def landing_page(request: Request) -> Response:
    html = request.app.state.html
    try:
        content = html.render(LANDING_TEMPLATE, {"PORT": request.app.state.port})
    except TemplateError as e:
        logger.error(f"Template rendering failed: {e}")
        return PlainTextResponse("Internal Server Error", status_code=500)
    return HTMLResponse(content)


@router.get("/health")
def health():
    return {"status": "ok"}
