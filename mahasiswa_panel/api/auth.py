"""
Mahasiswa Panel — Auth API routes
Forwards credentials to the identity provider and manages the session cookie.
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status

from mahasiswa_panel.clients.identity import IdentityProviderClient, get_identity_provider
from mahasiswa_panel.core.config import get_settings
from mahasiswa_panel.core.errors import IdentityProviderError
from mahasiswa_panel.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    VerifyOtpResetRequest,
)

settings = get_settings()
router = APIRouter(prefix="/api", tags=["auth"])


def _provider_failure(exc: IdentityProviderError, rejected_status: int) -> HTTPException:
    if exc.unreachable:
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)
    return HTTPException(status_code=rejected_status, detail=exc.message)


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    identity: IdentityProviderClient = Depends(get_identity_provider),
):
    """Check credentials with the provider and issue the session cookie."""
    try:
        session = await identity.sign_in_with_password(payload.email, payload.password)
    except IdentityProviderError as exc:
        raise _provider_failure(exc, status.HTTP_401_UNAUTHORIZED)

    set_session_cookie(response, session.access_token)
    return LoginResponse(message="Login berhasil", user=session.email)


@router.post("/register", response_model=MessageResponse)
async def register(
    payload: RegisterRequest,
    identity: IdentityProviderClient = Depends(get_identity_provider),
):
    """Create the account; the user still has to confirm by email before logging in."""
    try:
        await identity.sign_up(payload.email, payload.password, payload.full_name)
    except IdentityProviderError as exc:
        raise _provider_failure(exc, status.HTTP_400_BAD_REQUEST)

    return MessageResponse(message="Registrasi berhasil. Silakan cek email untuk verifikasi.")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    payload: ResetPasswordRequest,
    identity: IdentityProviderClient = Depends(get_identity_provider),
):
    try:
        await identity.reset_password_for_email(payload.email)
    except IdentityProviderError as exc:
        raise _provider_failure(exc, status.HTTP_400_BAD_REQUEST)

    return MessageResponse(message="OTP telah dikirim ke email Anda")


@router.post("/verify-otp-reset", response_model=MessageResponse)
async def verify_otp_reset(
    payload: VerifyOtpResetRequest,
    identity: IdentityProviderClient = Depends(get_identity_provider),
):
    """Verify the recovery code, then set the new password with the session it yields."""
    try:
        session = await identity.verify_recovery_otp(payload.email, payload.otp)
        await identity.update_password(session.access_token, payload.new_password)
    except IdentityProviderError as exc:
        raise _provider_failure(exc, status.HTTP_400_BAD_REQUEST)

    return MessageResponse(message="Password berhasil direset. Silakan login dengan password baru.")


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    clear_session_cookie(response)
    return MessageResponse(message="Logout berhasil")
