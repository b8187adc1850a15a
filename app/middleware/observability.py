from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.request_context import clear_request_context, set_request_context

logger = logging.getLogger(__name__)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        set_request_context(request_id=request_id)

        status_code = 500
        endpoint = request.url.path
        method = request.method

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            user_email = _extract_identity(request)
            duration_ms = round((time.perf_counter() - start) * 1000, 2)

            set_request_context(user_email=user_email)
            logger.info(
                "request completed",
                extra={
                    "request_id": request_id,
                    "user": user_email,
                    "endpoint": endpoint,
                    "method": method,
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                },
            )

            if "response" in locals():
                response.headers["X-Request-ID"] = request_id

            clear_request_context()


def _extract_identity(request: Request) -> str | None:
    return getattr(request.state, "identity", None)
