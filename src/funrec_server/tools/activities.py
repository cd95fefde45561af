"""Fun activities tool."""

from __future__ import annotations

from ..adapters import AdapterError
from ..adapters.geoapify import fetch_places
from ..logging import get_logger
from ..normalizer import normalize, unavailable_result
from ..schemas import ActivitiesOutput, PlacesData, Query
from ..settings import ServiceSettings
from ..ui import render_places_ui

logger = get_logger("activities")


def get_fun_activities(payload: Query, settings: ServiceSettings, trace_id: str) -> ActivitiesOutput:
    logger.info(
        "places_request",
        extra={
            "extra": {
                "trace_id": trace_id,
                "location_name": payload.location_name,
                "lat": payload.latitude,
                "lon": payload.longitude,
            }
        },
    )

    try:
        features = fetch_places(
            api_key=settings.geoapify_api_key,
            lat=payload.latitude,
            lon=payload.longitude,
            categories=settings.places_categories,
            limit=settings.places_limit,
            timeout_s=settings.request_timeout_s,
            base_url=settings.geoapify_base_url,
        )
    except AdapterError as exc:
        # Provider failures are reported in the message, not the error channel.
        logger.warning(
            "places_upstream_error",
            extra={
                "extra": {
                    "trace_id": trace_id,
                    "error_code": exc.code,
                    "error": exc.message,
                    "details": exc.details,
                }
            },
        )
        result = unavailable_result(payload)
    else:
        result = normalize(payload, features, limit=settings.places_limit)

    ui = render_places_ui(payload, result)
    return ActivitiesOutput(
        status=result.status,
        text=result.summary_text,
        data=PlacesData(places=result.places),
        ui=ui.model_dump(by_alias=True, exclude_none=True),
    )
