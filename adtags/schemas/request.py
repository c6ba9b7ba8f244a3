"""
API request schemas for the ad tag preview endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SizeMappingSpec(BaseModel):
    """A responsive size mapping to declare before any placeholder."""

    name: str = Field(..., description="Unique size mapping name")
    variations: list[str] = Field(
        default_factory=list,
        description="Rules [[browserW,browserH],[[slotW,slotH],...]], highest priority first",
    )


class PlaceholderSpec(BaseModel):
    """An ad slot rendered into a generated container."""

    unit_name: str = Field(..., description="Ad unit name as set up in Ad Manager")
    size: str = Field(..., description="Creative sizes as a JS literal, e.g. [300,250]")
    css_class: str = Field("", description="CSS class for the container")
    tag_name: str = Field("div", description="Container element name")
    size_mapping: str | None = Field(None, description="Size mapping name")
    display: bool = Field(True, description="Display as soon as services are enabled")


class AdUnitDefinition(BaseModel):
    """An ad slot whose container is owned by the page."""

    unit_name: str = Field(..., description="Ad unit name as set up in Ad Manager")
    size: str = Field(..., description="Creative sizes as a JS literal")
    container_id: str = Field(..., description="Existing DOM element id")


class PageTagsRequest(BaseModel):
    """Everything one page registers, in registration order."""

    network_code: str | None = Field(
        None, description="Ad Manager network code; blank hides every slot"
    )
    targeting: dict[str, str] | None = Field(None, description="Page-level key-values")
    size_mappings: list[SizeMappingSpec] = Field(default_factory=list)
    placeholders: list[PlaceholderSpec] = Field(default_factory=list)
    ad_units: list[AdUnitDefinition] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "example": {
                "network_code": "12345",
                "targeting": {"section": "news"},
                "size_mappings": [
                    {"name": "leader", "variations": ["[[1024,768],[[970,250],[728,90]]]", "[[0,0],[[320,50]]]"]}
                ],
                "placeholders": [
                    {"unit_name": "news_top", "size": "[[970,250],[728,90]]", "size_mapping": "leader"}
                ],
                "ad_units": [
                    {"unit_name": "news_oop", "size": "[1,1]", "container_id": "oop-slot"}
                ],
            }
        }
    }
