"""
Mahasiswa Panel — Upstream error types and the JSON error envelope
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Error types raised by our own schemas; their message is shown as-is.
CUSTOM_ERROR_TYPES = {"missing_fields", "password_mismatch", "invalid_number"}


class UpstreamError(Exception):
    """
    Failure reported by (or while reaching) an external collaborator.
    status_code is the upstream HTTP status, or None when the request
    never got a response (connection error, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def unreachable(self) -> bool:
        return self.status_code is None


class IdentityProviderError(UpstreamError):
    pass


class RecordStoreError(UpstreamError):
    pass


def error_body(message: str) -> dict:
    return {"success": False, "error": message}


def _body_missing_message(request: Request) -> str | None:
    """Required-fields message declared by the route's body schema, if any."""
    body_field = getattr(request.scope.get("route"), "body_field", None)
    model = getattr(getattr(body_field, "field_info", None), "annotation", None)
    return getattr(model, "missing_message", None)


def _validation_message(request: Request, exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Data tidak valid"
    first = errors[0]
    if first.get("type") == "missing" and tuple(first.get("loc", ())) == ("body",):
        # absent or JSON null body
        message = _body_missing_message(request)
        if message:
            return message
    if first.get("type") in CUSTOM_ERROR_TYPES:
        return first["msg"]
    field = first.get("loc", ("body",))[-1]
    return f"{field}: {first['msg']}"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(_validation_message(request, exc)),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(f"Terjadi kesalahan: {exc}"),
        )
