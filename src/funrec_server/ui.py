"""Declarative UI descriptors for the places result.

Builds plain data (card, map, table, alert) from an already normalized
``Result``; the hosting framework renders it.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .schemas import Place, Query, Result

MAP_STYLE = "mapbox://styles/mapbox/streets-v12"
MAP_ZOOM = 10


class _Component(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class MapMarker(_Component):
    latitude: float
    longitude: float
    title: str
    description: str
    text: str


class MapView(_Component):
    latitude: float
    longitude: float
    zoom: int = MAP_ZOOM


class MapUI(_Component):
    type: Literal["map"] = "map"
    initial_view: MapView = Field(serialization_alias="initialView")
    map_style: str = Field(default=MAP_STYLE, serialization_alias="mapStyle")
    markers: list[MapMarker] = Field(default_factory=list)


class TableColumn(_Component):
    key: str
    header: str
    type: str = "string"


class TableUI(_Component):
    type: Literal["table"] = "table"
    columns: list[TableColumn]
    rows: list[dict[str, Any]] = Field(default_factory=list)


class AlertUI(_Component):
    type: Literal["alert"] = "alert"
    variant: Literal["info", "warning", "error", "success"] = "info"
    title: str
    message: str


class CardUI(_Component):
    type: Literal["card"] = "card"
    render_mode: str = Field(default="page", serialization_alias="renderMode")
    title: str
    content: str | None = None
    children: list[MapUI | TableUI | AlertUI] = Field(default_factory=list)


PLACE_COLUMNS = [
    TableColumn(key="name", header="Name"),
    TableColumn(key="category", header="Category"),
    TableColumn(key="address", header="Address"),
]


def build_marker(place: Place) -> MapMarker:
    return MapMarker(
        latitude=place.latitude,
        longitude=place.longitude,
        title=place.name,
        description=f"Explore {place.name}",
        text=place.name,
    )


def render_places_ui(query: Query, result: Result) -> CardUI:
    title = f"Fun Activities in {query.location_name}"

    if result.status != "ok":
        alert = AlertUI(
            variant="info" if result.status == "not_found" else "error",
            title="No activities found" if result.status == "not_found" else "Service unavailable",
            message=result.summary_text,
        )
        return CardUI(title=title, children=[alert])

    map_ui = MapUI(
        initial_view=MapView(latitude=query.latitude, longitude=query.longitude),
        markers=[build_marker(place) for place in result.places],
    )
    table_ui = TableUI(
        columns=PLACE_COLUMNS,
        rows=[place.model_dump(include={"name", "category", "address"}) for place in result.places],
    )
    return CardUI(
        title=title,
        content=f"Discover exciting activities in {query.location_name} today!",
        children=[map_ui, table_ui],
    )
