"""
Mahasiswa Panel — Session cookie gate
Guards the record routes; returns 401 when the session cookie is missing
(or, with SUPABASE_JWT_SECRET configured, when it does not verify).
"""
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from jose import JWTError

from mahasiswa_panel.core.config import get_settings
from mahasiswa_panel.core.errors import error_body
from mahasiswa_panel.core.security import decode_session_token, verification_enabled

settings = get_settings()

# Path prefixes that require a session
PROTECTED_PREFIXES = ("/api/mahasiswa",)


def _unauthorized() -> JSONResponse:
    return JSONResponse(status_code=401, content=error_body("Unauthorized"))


class SessionCookieMiddleware(BaseHTTPMiddleware):
    """
    Reads the session cookie on protected paths and attaches it to
    request.state.session_token for the handlers.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return await call_next(request)

        if not request.url.path.startswith(PROTECTED_PREFIXES):
            return await call_next(request)

        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
        if not token:
            return _unauthorized()

        if verification_enabled():
            try:
                request.state.session_claims = decode_session_token(token)
            except JWTError:
                return _unauthorized()

        request.state.session_token = token
        return await call_next(request)
