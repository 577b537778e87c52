from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quickcalc import __version__
from quickcalc.api.routes_calc import router as calc_router
from quickcalc.launcher.dispatcher import build_dispatcher
from quickcalc.observability import log_event, run_scope
from quickcalc.units.registry import default_registry

# -----------------------------------------------------------------------------
# App setup
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    default_registry()
    app.state.dispatcher = build_dispatcher()
    yield
    app.state.dispatcher.close()
    app.state.dispatcher = None


app = FastAPI(title="quickcalc API", version=__version__, lifespan=lifespan)
app.include_router(calc_router)


@app.middleware("http")
async def attach_run_id(request: Request, call_next):
    path = str(request.url.path)
    with run_scope(request.headers.get("X-Run-ID")) as run_id:
        log_event("request.start", path=path, method=request.method)
        response = await call_next(request)
        response.headers["X-Run-ID"] = run_id
        log_event("request.end", path=path, status=response.status_code)
        return response


def _normalize_validation_errors(raw_errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    fields: List[Dict[str, str]] = []
    for err in raw_errors:
        loc = err.get("loc", [])
        loc_parts = [str(part) for part in loc if part != "body"]
        path = ".".join(["request", *loc_parts]) if loc_parts else "request"
        fields.append({"path": path, "message": err.get("msg", "Invalid request")})
    return {"error": "VALIDATION_ERROR", "fields": fields}


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=422, content=_normalize_validation_errors(exc.errors()))


@app.get("/v1/health")
def health() -> Dict[str, Any]:
    return {"ok": True, "version": __version__, "units": len(default_registry())}
