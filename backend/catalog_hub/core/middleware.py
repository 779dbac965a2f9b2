"""
Middleware — CORS and exception handlers for the FastAPI application.

Extracted from main.py to keep app factory slim.
Version: 1.0.0
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_hub.core.exceptions import ConfigurationError, RemoteAPIError, ValidationError

logger = logging.getLogger("middleware")


def apply_cors(app: FastAPI) -> None:
    """Apply CORS middleware with permissive defaults."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": str(exc)})


async def remote_api_error_handler(request: Request, exc: RemoteAPIError) -> JSONResponse:
    logger.error("remote api error path=%s status=%s error=%s", request.url.path, exc.status_code, exc)
    return _error_response(502, exc)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.error("remote payload invalid path=%s error=%s", request.url.path, exc)
    return _error_response(502, exc)


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("configuration error path=%s error=%s", request.url.path, exc)
    return _error_response(500, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Map fatal sync errors to {success: false, error} responses."""
    app.add_exception_handler(RemoteAPIError, remote_api_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
