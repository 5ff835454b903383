"""HTTP plumbing shared by all routers: error translation and request context."""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import (
    AuthenticationError,
    ObjectNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from shared.utils.logging import bind_request, get_logger

logger = get_logger(__name__)


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return error_response(400, exc.message, errors=exc.messages)


async def handle_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return error_response(404, exc.message)


async def handle_authentication_error(request: Request, exc: AuthenticationError) -> JSONResponse:
    logger.info("authentication_failed", reason=exc.message)
    return error_response(401, exc.message)


async def handle_permission_denied(request: Request, exc: PermissionDeniedError) -> JSONResponse:
    return error_response(403, exc.message)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = exc.errors()
    if not problems:
        return error_response(400, "Invalid request")

    first = problems[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return error_response(400, message)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(ObjectNotFoundError, handle_not_found)
    app.add_exception_handler(AuthenticationError, handle_authentication_error)
    app.add_exception_handler(PermissionDeniedError, handle_permission_denied)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def request_context_middleware(request: Request, call_next):
    """Bind a request id to every log line emitted while serving the request."""
    request_id = request.headers.get("x-request-id") or str(uuid4())
    bind_request(request_id, request.method, request.url.path)

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response
