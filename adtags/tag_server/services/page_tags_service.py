"""
Page tag service.

Replays a page's ad declarations against the request's ad tag context and
renders the resulting markup.
"""

from __future__ import annotations

from adtags.common.config import get_settings
from adtags.common.logger import get_logger
from adtags.common.utils import is_blank
from adtags.schemas.request import PageTagsRequest
from adtags.schemas.response import PageTagsResponse, PlaceholderMarkup
from adtags.tag_server.middleware.metrics import (
    record_ad_unit_defined,
    record_footer_tag,
    record_placeholder,
    record_size_mapping,
)
from adtags.tags import (
    AdTagContext,
    add_size_mapping,
    define_ad_unit,
    register_placeholder,
    render_footer_tag,
)

logger = get_logger(__name__)


class PageTagsService:
    """Register a page's slots on one request context and render them."""

    def __init__(self, context: AdTagContext):
        self.context = context
        self.settings = get_settings()

    def render(self, body: PageTagsRequest, request_id: str) -> PageTagsResponse:
        """
        Registration order:
        1. Size mappings, so placeholders may reference them
        2. Placeholders, each allocating a container id
        3. Ad units bound to containers the page already owns
        4. Footer tag over everything registered above
        """
        for mapping in body.size_mappings:
            add_size_mapping(self.context, mapping.name, mapping.variations)
            record_size_mapping()

        placeholders: list[PlaceholderMarkup] = []
        for spec in body.placeholders:
            html = register_placeholder(
                self.context,
                spec.unit_name,
                spec.size,
                css_class=spec.css_class,
                tag_name=spec.tag_name,
                size_mapping=spec.size_mapping,
                display=spec.display,
            )
            record_placeholder(spec.display)
            placeholders.append(
                PlaceholderMarkup(
                    unit_name=spec.unit_name,
                    container_id=self.context.ad_units[-1].container_id,
                    html=html,
                )
            )

        for unit in body.ad_units:
            define_ad_unit(self.context, unit.unit_name, unit.size, unit.container_id)
            record_ad_unit_defined()

        network_code = body.network_code
        if network_code is None:
            network_code = self.settings.tags.default_network_code

        footer_tag = render_footer_tag(self.context, network_code, body.targeting)
        record_footer_tag(not is_blank(network_code), len(self.context.ad_units))

        logger.info(
            "Page tags rendered",
            request_id=request_id,
            placeholders=len(placeholders),
            ad_units=len(self.context.ad_units),
            size_mappings=len(self.context.size_mappings),
            network_code=network_code or None,
        )

        return PageTagsResponse(
            request_id=request_id,
            placeholders=placeholders,
            footer_tag=footer_tag,
            ad_units=len(self.context.ad_units),
            size_mappings=len(self.context.size_mappings),
        )
