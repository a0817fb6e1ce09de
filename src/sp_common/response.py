"""Response envelope for every endpoint except GET /balance.

    {"code": 0, "message": "success", "data": {...},
     "timestamp": "...", "request_id": "req_..."}

code is 0 on success, the AppError code otherwise; data is null on error.
GET /balance keeps the bare {"balance", "debit", "credit"} shape that
existing clients parse.

request_id is the one RequestLogMiddleware put on request.state, so the
envelope, the X-Request-ID header and the request log line all agree.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from starlette.requests import Request


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def _request_id(request: Request | None) -> str:
    if request is None:
        return new_request_id()
    return getattr(request.state, "request_id", None) or new_request_id()


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=new_request_id)


def success_response(
    data: Any = None, message: str = "success", request: Request | None = None
) -> ApiResponse:
    return ApiResponse(code=0, message=message, data=data, request_id=_request_id(request))


def error_response(code: int, message: str, request: Request | None = None) -> ApiResponse:
    return ApiResponse(code=code, message=message, data=None, request_id=_request_id(request))
