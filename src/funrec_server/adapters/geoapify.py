"""Geoapify places adapter.

Encapsulates upstream API details and error normalization.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from ..logging import get_logger
from ..schemas import RawFeature
from . import AdapterError

logger = get_logger("geoapify")


def _raise_for_status(resp: httpx.Response) -> None:
    if resp.is_success:
        return
    message = "Geoapify error"
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        message = str(body["message"])
    raise AdapterError("UPSTREAM_ERROR", message, {"status_code": resp.status_code})


def _parse_features(body: Any) -> list[RawFeature]:
    features = body.get("features") if isinstance(body, dict) else None
    if not isinstance(features, list):
        raise AdapterError("BAD_RESPONSE", "Geoapify response has no features list")

    parsed: list[RawFeature] = []
    for index, item in enumerate(features):
        try:
            parsed.append(RawFeature.model_validate(item))
        except ValidationError as exc:
            # One malformed record must not cost the rest of the response.
            logger.warning(
                "places_feature_skipped",
                extra={"extra": {"index": index, "errors": exc.error_count()}},
            )
    return parsed


def fetch_places(
    *,
    api_key: str | None,
    lat: float,
    lon: float,
    base_url: str,
    categories: str = "tourism,leisure",
    limit: int = 10,
    timeout_s: float = 8.0,
    transport: httpx.BaseTransport | None = None,
) -> list[RawFeature]:
    if not api_key:
        raise AdapterError("MISSING_API_KEY", "GEOAPIFY_API_KEY is not set")

    params: dict[str, str | float | int] = {
        "lat": lat,
        "lon": lon,
        "categories": categories,
        "limit": limit,
        "apiKey": api_key,
    }

    url = f"{base_url.rstrip('/')}/places"
    try:
        with httpx.Client(timeout=timeout_s, transport=transport) as client:
            resp = client.get(url, params=params)
    except httpx.HTTPError as exc:
        raise AdapterError("UPSTREAM_UNAVAILABLE", str(exc) or exc.__class__.__name__) from exc

    _raise_for_status(resp)

    try:
        body = resp.json()
    except ValueError as exc:
        raise AdapterError("BAD_RESPONSE", "Geoapify response is not JSON") from exc

    features = _parse_features(body)
    logger.debug(
        "places_response",
        extra={"extra": {"status_code": resp.status_code, "features": len(features)}},
    )
    return features
