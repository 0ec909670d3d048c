# loom/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from loom.domain.errors import ErrorCode, HTTP_STATUS, LoomError
from loom.utils.logging import get_logger

logger = get_logger(__name__)


def error_body(code: ErrorCode, message: str, details=None) -> dict:
    return {"error": {"status": code.value, "message": message, "details": details or {}}}


def setup_error_handlers(app: FastAPI):
    """Every failure leaves the API as {"error": {"status", "message", "details"}}."""

    @app.exception_handler(LoomError)
    async def loom_error_handler(request: Request, exc: LoomError):
        log = logger.error if exc.code == ErrorCode.INTERNAL else logger.warning
        log(f"{request.method} {request.url.path} -> {exc.code.value}: {exc.message} {exc.context}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        logger.warning(f"{request.method} {request.url.path} -> invalid request: {errors}")
        return JSONResponse(
            status_code=HTTP_STATUS[ErrorCode.INVALID_ARGUMENT],
            content=error_body(ErrorCode.INVALID_ARGUMENT, "Request validation failed", {"errors": errors}),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} failed unexpectedly")
        return JSONResponse(
            status_code=HTTP_STATUS[ErrorCode.INTERNAL],
            content=error_body(ErrorCode.INTERNAL, "An internal error occurred, please retry"),
        )
