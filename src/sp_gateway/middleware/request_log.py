"""Request logging middleware.

Assigns each request an ID, stores it on request.state for the response
envelope, returns it in the X-Request-ID header and logs one line per request:

    INFO [POST] /api/v1/expenses → 201 (23ms) req_a1b2c3d4e5f6

A well-formed X-Request-ID sent by the client is kept so its logs can be
correlated with ours. Server errors (5xx) are logged at WARNING.
"""

import logging
import re
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.sp_common.response import new_request_id

logger = logging.getLogger("sp.request")

REQUEST_ID_HEADER = "X-Request-ID"
_CLIENT_ID_RE = re.compile(r"^[A-Za-z0-9_.-]{1,64}$")


def _resolve_request_id(request: Request) -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER)
    if supplied and _CLIENT_ID_RE.match(supplied):
        return supplied
    return new_request_id()


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _resolve_request_id(request)
        request.state.request_id = request_id

        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id

        logger.log(
            logging.WARNING if response.status_code >= 500 else logging.INFO,
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id,
        )
        return response
