from __future__ import annotations

import logging
import time
from uuid import uuid4

from fastapi import FastAPI, Request, Response

logger = logging.getLogger(__name__)
REQUEST_ID_HEADER = "X-Request-Id"


def request_id_from(request: Request) -> str:
    return getattr(request.state, "request_id", "") or ""


def install_request_id_middleware(app: FastAPI) -> None:
    """Tag every request with an id and log it on the way in and out."""

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id

        logger.info(
            "request received",
            extra={
                "event": "request_received",
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
            },
        )

        started_at = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started_at) * 1000, 2)

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "response sent",
            extra={
                "event": "response_sent",
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response
