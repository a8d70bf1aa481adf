from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mood_relay.core.middleware.http_logging import get_request_id
from mood_relay.domain.exceptions import AnalyzeRequestError

logger = logging.getLogger("mood_relay.request_errors")


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(AnalyzeRequestError)
    async def handle_analyze_request_error(
        request: Request,
        exc: AnalyzeRequestError,
    ) -> JSONResponse:
        # Do not log the request body; it carries the user's text.
        level = logging.ERROR if exc.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "Analyze request rejected: %s",
            exc.message,
            exc_info=exc if exc.status_code >= 500 else None,
            extra={
                "request_id": get_request_id(request),
                "http_method": request.method,
                "request_path": request.url.path,
                "status_code": exc.status_code,
                "error": type(exc).__name__,
            },
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
