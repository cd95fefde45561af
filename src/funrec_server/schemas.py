"""Shared schemas (single source of truth).

Tool handlers, the normalizer and the HTTP server all import these models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ADDRESS = "No address available"

ResultStatus = Literal["ok", "not_found", "unavailable"]


class ToolError(BaseModel):
    """Normalized error payload returned by tools."""
    code: str
    message: str
    details: dict[str, Any] | None = None


class ToolMeta(BaseModel):
    """Metadata attached to tool responses for observability."""
    tool_name: str
    trace_id: str
    latency_ms: int | None = None
    source: str | None = None


class ToolResponse(BaseModel):
    """Unified response wrapper for all tools."""
    ok: bool
    data: Any | None = None
    error: ToolError | None = None
    meta: ToolMeta


class ToolPricing(BaseModel):
    price_per_use: float = Field(default=0, serialization_alias="pricePerUse")
    currency: str = "USD"


class Query(BaseModel):
    """Input for the fun activities tool."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    location_name: str = Field(alias="locationName", description="Location name")
    latitude: float = Field(ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(ge=-180, le=180, description="Longitude coordinate")

    @field_validator("location_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("locationName must not be blank.")
        return value


class FeatureProperties(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    categories: list[str] = Field(default_factory=list)
    formatted: str | None = None

    @field_validator("categories", mode="before")
    @classmethod
    def _null_categories(cls, value: Any) -> Any:
        return [] if value is None else value


class FeatureGeometry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Provider order: [longitude, latitude].
    coordinates: list[float] = Field(min_length=2)


class RawFeature(BaseModel):
    """Single point-of-interest record as returned by the provider."""
    model_config = ConfigDict(extra="ignore")

    properties: FeatureProperties = Field(default_factory=FeatureProperties)
    geometry: FeatureGeometry


class Place(BaseModel):
    """Normalized place returned to callers."""
    name: str
    category: str
    address: str = DEFAULT_ADDRESS
    latitude: float
    longitude: float


class Result(BaseModel):
    """Outcome of normalizing one provider response."""
    status: ResultStatus
    summary_text: str
    places: list[Place] = Field(default_factory=list)


class PlacesData(BaseModel):
    places: list[Place]


class ActivitiesOutput(BaseModel):
    """Output for the fun activities tool."""
    status: ResultStatus
    text: str
    data: PlacesData
    ui: dict[str, Any]


@dataclass(frozen=True)
class ToolSpec:
    """Tool registry metadata used by the server."""
    name: str
    description: str
    input_model: type[BaseModel]
    output_model: type[BaseModel]
    pricing: ToolPricing
