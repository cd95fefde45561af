"""Tool registry for the places service."""

from __future__ import annotations

from typing import Callable

from ..schemas import ActivitiesOutput, Query, ToolPricing, ToolSpec
from .activities import get_fun_activities

ToolHandler = Callable[[object, object, str], object]

TOOL_SPECS: dict[str, ToolSpec] = {
    "get_fun_activities": ToolSpec(
        name="get_fun_activities",
        description="Fetches fun activities around the area",
        input_model=Query,
        output_model=ActivitiesOutput,
        pricing=ToolPricing(price_per_use=0, currency="USD"),
    ),
}

TOOL_HANDLERS: dict[str, ToolHandler] = {
    "get_fun_activities": get_fun_activities,
}


def get_tool_spec(name: str) -> ToolSpec | None:
    return TOOL_SPECS.get(name)


def get_tool_handler(name: str) -> ToolHandler | None:
    return TOOL_HANDLERS.get(name)


def list_tool_specs() -> list[ToolSpec]:
    return list(TOOL_SPECS.values())
