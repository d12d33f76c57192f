"""Service error taxonomy and the centralized exception-to-response translator."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.services.directory import DuplicateRecordError, StorageError, StorageQueryError

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Server Error"


class ServiceError(Exception):
    """Base for errors a handler reports to the client with a fixed status code."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class Conflict(ServiceError):
    """Duplicate username or email. Reported as 400, like the rest of the validation failures."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Duplicate field value entered"


class InvalidCredentials(ServiceError):
    """Login failure; deliberately identical for unknown account and wrong password."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Unauthorized(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized to access this route"


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Build the `{success: false, error}` envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


def _detail_from_validation(exc: RequestValidationError) -> str:
    errors = exc.errors() or []
    if not errors:
        return "Request validation failed."
    first = errors[0]
    field = ".".join(str(x) for x in first.get("loc", []) if x != "body")
    msg = first.get("msg") or "Invalid input."
    if field:
        return f"{field}: {msg}"
    return msg


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return error_response(exc.status_code, exc.message, headers=headers)


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    if isinstance(exc, DuplicateRecordError):
        logger.warning(
            "Duplicate record rejected by store",
            extra={"path": request.url.path, "method": request.method},
        )
        return error_response(status.HTTP_400_BAD_REQUEST, "Duplicate field value entered")
    logger.error(
        "Account store failure on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    if isinstance(exc, StorageQueryError):
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database query error")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_SERVER_ERROR)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, _detail_from_validation(exc))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) and exc.detail else "Request failed"
    return error_response(exc.status_code, detail, headers=getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """Install every translator on the app; the last one catches anything left over."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
