"""FastAPI application exposing the LSF transitions SDK.

Endpoints:
  GET  /v1/health
  GET  /v1/rules
  POST /v1/transitions
  POST /v1/validate
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lsf_transitions import __version__
from lsf_transitions.config import EngineConfig, load_config
from lsf_transitions.exceptions import (
    ExpressionFormatError,
    LSFTransitionError,
    RuleTableError,
    TransitionValidationError,
)

from .config import Settings
from .routes import rules, transitions, validate

settings = Settings()

if settings.debug:
    logging.basicConfig(level=logging.DEBUG)

app = FastAPI(
    title="LSF Transitions API",
    description="REST API for computing and validating LSF expression transitions.",
    version=__version__,
)

# Loaded once; handlers only read it.
app.state.engine = load_config(settings.config_path) if settings.config_path else EngineConfig()

# CORS: only allow configured origins. Empty list → no cross-origin access.
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

app.include_router(rules.router, prefix="/v1", tags=["rules"])
app.include_router(transitions.router, prefix="/v1", tags=["transitions"])
app.include_router(validate.router, prefix="/v1", tags=["validate"])


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


@app.exception_handler(ExpressionFormatError)
async def expression_format_error_handler(request: Request, exc: ExpressionFormatError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "expression_format_error", "detail": str(exc)},
    )


@app.exception_handler(RuleTableError)
async def rule_table_error_handler(request: Request, exc: RuleTableError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "rule_table_error", "detail": str(exc)},
    )


@app.exception_handler(TransitionValidationError)
async def transition_validation_error_handler(
    request: Request, exc: TransitionValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "transition_validation_error", "detail": str(exc)},
    )


@app.exception_handler(LSFTransitionError)
async def lsf_transition_error_handler(request: Request, exc: LSFTransitionError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "lsf_transition_error", "detail": str(exc)},
    )


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


@app.get("/v1/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}
