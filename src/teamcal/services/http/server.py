from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from ...api import api_state, call_api, get_api_functions
from ...api.models import ExportRequest
from ...data import SupabaseNotInitializedError, SupabaseSessionMissingError
from ...domain import ExportOptions
from ...export import ExportFailed, Exported, NeedsConfirmation, NoEventsToExport
from ...bootstrap import configure_logging

logger = logging.getLogger(__name__)

app = FastAPI(title="Team Calendar API", version="0.3.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ApiCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


@app.get("/api/functions")
async def list_api_functions() -> JSONResponse:
    return JSONResponse({"functions": [func.describe() for func in get_api_functions()]})


@app.post("/api/functions/{function_name}")
async def invoke_api_function(function_name: str, request: ApiCallRequest) -> JSONResponse:
    try:
        result = call_api(function_name, **request.arguments)
    except KeyError as exc:
        logger.warning("API function not found: %s", function_name)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("API function %s failed", function_name)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    logger.debug("API function %s executed successfully", function_name)
    return JSONResponse({"name": function_name, "result": result})


@app.post("/api/export")
def download_export(request: ExportRequest) -> Response:
    try:
        actor_id = api_state.context.gateway.current_user_id()
    except (SupabaseNotInitializedError, SupabaseSessionMissingError) as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    options = ExportOptions(
        team_id=request.team_id or None,
        event_type_id=request.event_type_id or None,
        new_events_only=request.new_events_only,
        force=request.force,
    )
    result = api_state.export.request_export(actor_id, options)

    if isinstance(result, Exported):
        artifact = result.artifact
        return Response(
            content=artifact.content,
            media_type=artifact.media_type,
            headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
        )
    if isinstance(result, NeedsConfirmation):
        return JSONResponse(
            status_code=409,
            content={
                "requires_confirmation": True,
                "detail": "A full export is already on record. Repeat the request with force=true to export again.",
            },
        )
    if isinstance(result, NoEventsToExport):
        raise HTTPException(status_code=404, detail="No events to export")
    if isinstance(result, ExportFailed):
        raise HTTPException(status_code=502, detail=f"Export failed: {result.reason}")
    raise HTTPException(status_code=500, detail="Unexpected export result")


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    import asyncio
    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    configure_logging()
    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Serving Team Calendar API on %s:%s", host, port)
    asyncio.run(serve(app, config))
