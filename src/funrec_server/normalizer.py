"""Place normalizer.

Turns a raw provider payload into the stable place list returned to callers.
Pure data in, pure data out: no I/O and no UI construction happens here.
"""

from __future__ import annotations

from typing import Iterable

from .schemas import DEFAULT_ADDRESS, Place, Query, RawFeature, Result

MAX_PLACES = 10


def not_found_result(query: Query) -> Result:
    return Result(
        status="not_found",
        summary_text=f"No fun activities found in {query.location_name}.",
        places=[],
    )


def unavailable_result(query: Query) -> Result:
    return Result(
        status="unavailable",
        summary_text=(
            f"Sorry, we couldn't fetch activities for {query.location_name} right now. "
            "Please try again later."
        ),
        places=[],
    )


def to_place(feature: RawFeature) -> Place | None:
    """Map one provider feature to a Place, or None when it has no name."""
    props = feature.properties
    name = (props.name or "").strip()
    if not name:
        return None
    lon, lat = feature.geometry.coordinates[0], feature.geometry.coordinates[1]
    return Place(
        name=name,
        category=", ".join(props.categories),
        address=(props.formatted or "").strip() or DEFAULT_ADDRESS,
        latitude=lat,
        longitude=lon,
    )


def format_summary(query: Query, places: list[Place]) -> str:
    lines = [f"{i}. {place.name} - {place.address}" for i, place in enumerate(places, start=1)]
    return "\n".join([f"Here's a list of fun activities in {query.location_name}:", *lines])


def normalize(query: Query, raw_features: Iterable[RawFeature], limit: int = MAX_PLACES) -> Result:
    places: list[Place] = []
    for index, feature in enumerate(raw_features):
        if index >= limit:
            break
        place = to_place(feature)
        # Nameless features are dropped, never given a placeholder name.
        if place is not None:
            places.append(place)

    if not places:
        return not_found_result(query)

    return Result(status="ok", summary_text=format_summary(query, places), places=places)
