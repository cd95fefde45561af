"""FastAPI app exposing the FunRec tools.

Each tool is callable over HTTP with structured I/O.
"""

from __future__ import annotations

import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI, HTTPException, Request
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from . import __version__
from .logging import configure_logging, get_logger
from .schemas import ToolError, ToolMeta, ToolResponse
from .settings import get_settings
from .tools import get_tool_handler, get_tool_spec, list_tool_specs

logger = get_logger("server")

SERVICE_METADATA: dict[str, Any] = {
    "title": "FunRec Places Service",
    "description": "A service for recommending fun activities around a location",
    "version": __version__,
    "author": "Mark and Renzo",
    "tags": ["Activities", "fun", "places"],
    "logo": "https://img.icons8.com/?size=100&id=2qSx1JG5SSGn&format=png&color=000000",
    "example_queries": [
        {
            "category": "Activities",
            "queries": [
                "What fun activities around Carson?",
                "What fun activities around Cerritos?",
                "What fun activities around Long Beach?",
            ],
        }
    ],
}


def check_startup_config() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "service_config",
        extra={
            "extra": {
                "port": settings.port,
                "geoapify_key_set": bool(settings.geoapify_api_key),
                "service_key_set": bool(settings.service_api_key),
                "places_limit": settings.places_limit,
            }
        },
    )
    settings.require_provider_key()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    check_startup_config()
    yield


app = FastAPI(title="FunRec Places Service", version=__version__, lifespan=lifespan)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/service")
def service_metadata() -> dict[str, Any]:
    return SERVICE_METADATA


@app.get("/tools")
def list_tools() -> list[dict[str, Any]]:
    return [
        {
            "name": spec.name,
            "description": spec.description,
            "pricing": spec.pricing.model_dump(by_alias=True),
            "input_schema": spec.input_model.model_json_schema(),
            "output_schema": spec.output_model.model_json_schema(),
        }
        for spec in list_tool_specs()
    ]


def _failure(tool_name: str, trace_id: str, start: float, error: ToolError, event: str) -> ToolResponse:
    latency_ms = int((time.time() - start) * 1000)
    logger.info(
        event,
        extra={
            "extra": {
                "trace_id": trace_id,
                "tool": tool_name,
                "latency_ms": latency_ms,
                "ok": False,
                "error_code": error.code,
            }
        },
    )
    return ToolResponse(
        ok=False,
        data=None,
        error=error,
        meta=ToolMeta(tool_name=tool_name, trace_id=trace_id, latency_ms=latency_ms),
    )


@app.post("/tools/{tool_name}")
async def call_tool(tool_name: str, request: Request) -> ToolResponse:
    # Every tool call gets a trace_id for end-to-end debugging.
    trace_id = request.headers.get("x-trace-id") or str(uuid.uuid4())
    agent_id = request.headers.get("x-agent-id")
    start = time.time()
    settings = get_settings()

    spec = get_tool_spec(tool_name)
    handler = get_tool_handler(tool_name)
    if not spec or not handler:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {tool_name}")

    try:
        payload = await request.json()
    except ValueError as exc:
        error = ToolError(code="INVALID_ARGUMENT", message=f"Request body is not valid JSON: {exc}")
        return _failure(tool_name, trace_id, start, error, "tool_validation_error")

    try:
        input_obj = spec.input_model.model_validate(payload)
        result = await run_in_threadpool(handler, input_obj, settings, trace_id)
    except ValidationError as exc:
        error = ToolError(code="INVALID_ARGUMENT", message=str(exc))
        return _failure(tool_name, trace_id, start, error, "tool_validation_error")
    except Exception as exc:  # noqa: BLE001
        logger.exception("tool_exception", extra={"extra": {"trace_id": trace_id, "tool": tool_name}})
        error = ToolError(code="TOOL_ERROR", message=str(exc))
        return _failure(tool_name, trace_id, start, error, "tool_error")

    latency_ms = int((time.time() - start) * 1000)
    logger.info(
        "tool_call",
        extra={
            "extra": {
                "trace_id": trace_id,
                "agent_id": agent_id,
                "tool": tool_name,
                "latency_ms": latency_ms,
                "ok": True,
            }
        },
    )
    return ToolResponse(
        ok=True,
        data=result.model_dump(),
        error=None,
        meta=ToolMeta(tool_name=tool_name, trace_id=trace_id, latency_ms=latency_ms, source="geoapify"),
    )


def main() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    settings.require_provider_key()
    uvicorn.run(
        "funrec_server.server:app",
        host=settings.host,
        port=settings.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
