import logging
import traceback
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.utils.exceptions import AppException, ErrorCode

logger = logging.getLogger(__name__)

# Plain HTTPExceptions raised by FastAPI/Starlette themselves (unknown route,
# wrong method, unparseable multipart body) carry no error code of their own.
_HTTP_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST:        ErrorCode.VALIDATION_ERROR,
    status.HTTP_401_UNAUTHORIZED:       ErrorCode.UNAUTHORIZED,
    status.HTTP_404_NOT_FOUND:          ErrorCode.NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.METHOD_NOT_ALLOWED,
}


def _envelope(
    status_code: int,
    message: str,
    code: str,
    details: list | None = None,
    field: str | None = None,
    headers: dict | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "error": {"code": code, "details": details, "field": field},
        },
        headers=headers,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle all AppException subclasses (our custom exceptions)."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    error = exc.detail["error"]
    return _envelope(
        exc.status_code, exc.message, error["code"],
        details=error.get("details"), field=error.get("field"), headers=exc.headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework-raised HTTP errors, rewrapped so clients always see one error shape."""
    message = exc.detail if isinstance(exc.detail, str) else "Request could not be processed"
    code = _HTTP_ERROR_CODES.get(exc.status_code, ErrorCode.INTERNAL_SERVER_ERROR
                                 if exc.status_code >= 500 else ErrorCode.VALIDATION_ERROR)
    return _envelope(exc.status_code, message, code, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    422 for bad JSON bodies, query params and multipart form fields.
    Form fields validated through validate_form() have no "body" prefix in loc.
    """
    details = []
    for error in exc.errors():
        loc = error.get("loc", [])
        field = ".".join(str(l) for l in loc if l != "body") if loc else "unknown"
        details.append({
            "field": field,
            "message": error.get("msg", "Invalid value"),
        })

    return _envelope(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error. Please check your input.",
        ErrorCode.VALIDATION_ERROR,
        details=details,
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """
    Constraint violations that slipped past the service layer.
    A foreign key failure means the parent row (usually a vehicle) was
    deleted while the request was in flight.
    """
    logger.warning(f"IntegrityError on {request.method} {request.url.path}: {exc.orig}")
    if "foreign key" in str(exc.orig).lower():
        return _envelope(
            status.HTTP_404_NOT_FOUND,
            "The referenced record no longer exists.",
            ErrorCode.NOT_FOUND,
        )
    return _envelope(
        status.HTTP_409_CONFLICT,
        "A record with this data already exists.",
        ErrorCode.DUPLICATE_ENTRY,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the full traceback, never leak it to the client."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}\n"
        f"{''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))}"
    )
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please try again later.",
        ErrorCode.INTERNAL_SERVER_ERROR,
    )
