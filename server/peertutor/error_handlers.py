"""Translate domain and storage errors into JSON responses."""
from __future__ import annotations

import logging

import psycopg2
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from errors import PeerTutorError, StoreUnavailable

logger = logging.getLogger(__name__)


def error_payload(exc: PeerTutorError) -> dict:
    payload = {"status": "error", "message": exc.reason}
    if isinstance(exc, StoreUnavailable):
        payload["retryable"] = True
    return payload


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(PeerTutorError)
    async def _domain_error(request: Request, exc: PeerTutorError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc.reason)
        return JSONResponse(error_payload(exc), status_code=exc.status_code)

    @app.exception_handler(psycopg2.Error)
    async def _storage_error(request: Request, exc: psycopg2.Error) -> JSONResponse:
        logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
        unavailable = StoreUnavailable()
        return JSONResponse(error_payload(unavailable), status_code=unavailable.status_code)
