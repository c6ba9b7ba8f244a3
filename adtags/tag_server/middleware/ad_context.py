"""
Per-request ad tag context.

Every request gets a fresh ``AdTagContext`` on ``request.state.ad_tags``.
Route handlers and templates receive it through ``get_ad_tags`` and pass
it explicitly to the registrar and renderer; it is dropped with the
request state once the response is sent.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from adtags.common.config import TagSettings, get_settings
from adtags.common.exceptions import EnvironmentMissingError
from adtags.common.logger import get_logger
from adtags.tags.registry import AdTagContext

logger = get_logger(__name__)

STATE_KEY = "ad_tags"


class AdTagsMiddleware(BaseHTTPMiddleware):
    """Attach an empty ad tag registry to each incoming request."""

    def __init__(self, app, tag_settings: TagSettings | None = None):
        super().__init__(app)
        self.tag_settings = tag_settings

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        context = AdTagContext(
            settings=self.tag_settings or get_settings().tags,
            scheme=_request_scheme(request),
        )
        setattr(request.state, STATE_KEY, context)
        return await call_next(request)


def _request_scheme(request: Request) -> str:
    """Scheme the browser used, honouring a TLS-terminating proxy."""
    forwarded = request.headers.get("x-forwarded-proto", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.url.scheme


def get_ad_tags(request: Request) -> AdTagContext:
    """
    FastAPI dependency returning the ad tag context of the current request.

    Raises:
        EnvironmentMissingError: ``AdTagsMiddleware`` is not installed.
    """
    context = getattr(request.state, STATE_KEY, None)
    if context is None:
        raise EnvironmentMissingError(
            "AdTags must be run in a web application with AdTagsMiddleware installed."
        )
    return context
