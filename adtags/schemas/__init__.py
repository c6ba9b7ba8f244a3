"""
Pydantic schemas for the ad tag API.
"""

from adtags.schemas.request import (
    AdUnitDefinition,
    PageTagsRequest,
    PlaceholderSpec,
    SizeMappingSpec,
)
from adtags.schemas.response import (
    ErrorResponse,
    HealthResponse,
    PageTagsResponse,
    PlaceholderMarkup,
)

__all__ = [
    # Request schemas
    "AdUnitDefinition",
    "PageTagsRequest",
    "PlaceholderSpec",
    "SizeMappingSpec",
    # Response schemas
    "ErrorResponse",
    "HealthResponse",
    "PageTagsResponse",
    "PlaceholderMarkup",
]
