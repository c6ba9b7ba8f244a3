"""
GPT ad tags: request-scoped slot registry and footer tag renderer.
"""

from adtags.tags.models import AdUnit, SizeMapping
from adtags.tags.registrar import add_size_mapping, define_ad_unit, register_placeholder
from adtags.tags.registry import AdTagContext, ContainerIdAllocator
from adtags.tags.renderer import FooterTagBuilder, render_footer_tag

__all__ = [
    "AdTagContext",
    "AdUnit",
    "ContainerIdAllocator",
    "FooterTagBuilder",
    "SizeMapping",
    "add_size_mapping",
    "define_ad_unit",
    "register_placeholder",
    "render_footer_tag",
]
