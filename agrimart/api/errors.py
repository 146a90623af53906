# agrimart/api/errors.py
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import redis
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from agrimart.domain.errors import MarketError
from agrimart.utils.logging import get_logger

logger = get_logger(__name__)


def http_error(e: MarketError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    err = errors[0]
    field = ".".join(str(p) for p in err.get("loc", ())[1:])
    return f"{field}: {err.get('msg')}" if field else err.get("msg", "Invalid request")


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": _first_validation_message(exc)},
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"[{request.method} {request.url.path}] database error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "INTERNAL_ERROR"},
        )

    @app.exception_handler(redis.RedisError)
    async def redis_exception_handler(request: Request, exc: redis.RedisError):
        logger.error(f"[{request.method} {request.url.path}] redis error: {exc}")
        return JSONResponse(
            status_code=503,
            content={"success": False, "error": "SERVICE_UNAVAILABLE"},
        )
