"""
Middleware for the tag server.
"""

from adtags.tag_server.middleware.ad_context import AdTagsMiddleware, get_ad_tags
from adtags.tag_server.middleware.metrics import (
    MetricsMiddleware,
    metrics_endpoint,
    record_ad_unit_defined,
    record_footer_tag,
    record_placeholder,
    record_size_mapping,
)

__all__ = [
    "AdTagsMiddleware",
    "get_ad_tags",
    "MetricsMiddleware",
    "metrics_endpoint",
    "record_placeholder",
    "record_ad_unit_defined",
    "record_size_mapping",
    "record_footer_tag",
]
