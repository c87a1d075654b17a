"""Request correlation IDs.

Reuses an incoming X-Request-ID (or X-Correlation-ID) or generates one,
binds it to every log line of the request and echoes it back.
"""

from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ...infrastructure.logging import set_correlation_id

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_ID_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        cid = (
            request.headers.get(REQUEST_ID_HEADER)
            or request.headers.get(CORRELATION_ID_HEADER)
            or str(uuid4())
        )
        set_correlation_id(cid)

        with structlog.contextvars.bound_contextvars(
            correlation_id=cid,
            method=request.method,
            path=request.url.path,
        ):
            logger.info("Request started")
            response = await call_next(request)
            logger.info("Request completed", status_code=response.status_code)

        response.headers[REQUEST_ID_HEADER] = cid
        return response
