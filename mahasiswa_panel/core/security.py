"""
Mahasiswa Panel — Session token verification (JWT decode only, shared secret)
"""
from typing import Any

from jose import jwt

from mahasiswa_panel.core.config import get_settings

settings = get_settings()


def verification_enabled() -> bool:
    return bool(settings.SUPABASE_JWT_SECRET)


def decode_session_token(token: str) -> dict[str, Any]:
    """Decode and validate a provider-issued access token. Raises JWTError on failure."""
    return jwt.decode(
        token,
        settings.SUPABASE_JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
    )
