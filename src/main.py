"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.sp_common.database import engine
from src.sp_common.errors import AppError
from src.sp_common.redis_client import close_redis, get_redis
from src.sp_common.response import error_response
from src.sp_expense.api.router import router as expense_router
from src.sp_gateway.api.router import router as auth_router
from src.sp_gateway.api.users_router import router as users_router
from src.sp_gateway.middleware.request_log import RequestLogMiddleware
from src.sp_ledger.api.router import router as balance_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB (+ Redis when it backs the cache). Shutdown: dispose."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    if settings.BALANCE_CACHE_BACKEND == "redis":
        redis = await get_redis()
        await redis.ping()
    logger.info(
        "Balance cache: backend=%s ttl=%ds invalidate_participants=%s",
        settings.BALANCE_CACHE_BACKEND,
        settings.BALANCE_CACHE_TTL_SECONDS,
        settings.BALANCE_INVALIDATE_PARTICIPANTS,
    )
    yield
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("[%d] %s", exc.code, exc.message)
    resp = error_response(exc.code, exc.message, request=request)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Rejected values are not echoed back: they may be passwords or inf/nan,
    # which JSONResponse cannot serialize
    errors = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


app.include_router(auth_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(expense_router, prefix="/api/v1")
app.include_router(balance_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
