"""
Tag Router – placeholder and footer tag previews.

Publishers post the slots a page declares and get back the container
markup and the footer script exactly as the page would render them.

Example request:
    POST /api/v1/tags/preview
    {
        "network_code": "12345",
        "targeting": {"section": "news"},
        "size_mappings": [{"name": "leader", "variations": ["[[1024,768],[[970,250]]]"]}],
        "placeholders": [{"unit_name": "news_top", "size": "[970,250]", "size_mapping": "leader"}]
    }
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from adtags.common.logger import get_logger, log_context
from adtags.common.utils import generate_request_id
from adtags.schemas.request import PageTagsRequest
from adtags.schemas.response import PageTagsResponse
from adtags.tag_server.middleware.ad_context import get_ad_tags
from adtags.tag_server.services.page_tags_service import PageTagsService
from adtags.tags import AdTagContext

logger = get_logger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def _get_page_tags_service(context: AdTagContext = Depends(get_ad_tags)) -> PageTagsService:
    """Dependency to get the page tag service bound to this request's context."""
    return PageTagsService(context)


def _get_request_id(request: Request) -> str:
    """Request id assigned by the logging middleware."""
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = generate_request_id()
        request.state.request_id = request_id
        log_context(request_id=request_id)
    return request_id


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post(
    "/preview",
    response_model=PageTagsResponse,
    summary="Render placeholders and footer tag",
)
async def preview_tags(
    body: PageTagsRequest,
    service: PageTagsService = Depends(_get_page_tags_service),
    request_id: str = Depends(_get_request_id),
) -> PageTagsResponse:
    """Register the page's slots and return the generated markup."""
    return service.render(body, request_id)


@router.post(
    "/page",
    response_class=HTMLResponse,
    summary="Render a demo page with every slot",
    responses={200: {"content": {"text/html": {}}, "description": "HTML page"}},
)
async def preview_page(
    body: PageTagsRequest,
    service: PageTagsService = Depends(_get_page_tags_service),
    request_id: str = Depends(_get_request_id),
) -> HTMLResponse:
    """Same as ``/preview`` but laid out as a complete HTML document."""
    rendered = service.render(body, request_id)
    containers = "\n".join(p.html for p in rendered.placeholders)

    page = (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head><meta charset=\"utf-8\"><title>Ad tag preview</title></head>\n"
        "<body>\n"
        f"{containers}\n"
        f"{rendered.footer_tag}"
        "</body>\n"
        "</html>\n"
    )

    return HTMLResponse(
        content=page,
        headers={
            "X-Request-ID": request_id,
            "Cache-Control": "no-store",
        },
    )
