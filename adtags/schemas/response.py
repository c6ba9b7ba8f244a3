"""
API response schemas.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class PlaceholderMarkup(BaseModel):
    """Container markup produced for one placeholder."""

    unit_name: str = Field(..., description="Ad unit name")
    container_id: str = Field(..., description="Generated container id")
    html: str = Field(..., description="Container element")


class PageTagsResponse(BaseModel):
    """Markup for a page: one container per placeholder and the footer tag."""

    request_id: str = Field(..., description="Request identifier")
    placeholders: list[PlaceholderMarkup] = Field(default_factory=list)
    footer_tag: str = Field(..., description="Script block to place after the placeholders")
    ad_units: int = Field(..., description="Number of slots defined in the footer tag")
    size_mappings: int = Field(..., description="Number of size mappings declared")


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Service version")
    container_id_scope: str = Field(..., description="Container id counter scope")


class ErrorResponse(BaseModel):
    """Error response schema."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: dict[str, Any] | None = Field(None, description="Error details")
    request_id: str | None = Field(None, description="Request identifier")

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "UndefinedReferenceError",
                "message": "Size mapping 'leader' not defined. Sizes must be defined before adding to a unit.",
                "details": {"argument": "size_mapping", "size_mapping": "leader"},
                "request_id": "req_abc123",
            }
        }
    }
