"""FastAPI application factory."""

from __future__ import annotations
import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from estimator.api.routes import router
from estimator.core.errors import (
    EstimatorError, TemplateNotFoundError, UnsupportedTypeError,
)
from estimator.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


async def _not_found(request: Request, exc: EstimatorError) -> JSONResponse:
    return _error(404, exc)


async def _unprocessable(request: Request, exc: EstimatorError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return _error(422, exc)


async def _invalid_model(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(include_url=False, include_context=False), "error": "ValidationError"},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Building Estimator",
        description="Parametric steel building and photovoltaic canopy generator",
        version="0.1.0",
    )

    # CORS for browser front-ends
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(UnsupportedTypeError, _not_found)
    app.add_exception_handler(TemplateNotFoundError, _not_found)
    app.add_exception_handler(EstimatorError, _unprocessable)
    app.add_exception_handler(ValidationError, _invalid_model)

    app.include_router(router, prefix="/api")

    return app


configure_logging(
    level=os.getenv("ESTIMATOR_LOG_LEVEL", "INFO"),
    json_output=os.getenv("ESTIMATOR_LOG_FORMAT", "text").lower() == "json",
)
app = create_app()
