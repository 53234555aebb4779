"""
Mahasiswa Panel — Identity Provider client (Supabase GoTrue REST API)

Every call opens a short-lived httpx.AsyncClient. Non-2xx answers become
IdentityProviderError carrying the provider's own message; transport
failures become IdentityProviderError with status_code=None.
"""
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import httpx

from mahasiswa_panel.core.config import get_settings
from mahasiswa_panel.core.errors import IdentityProviderError

settings = get_settings()
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    email: str


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "error_description", "message", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code}"


class IdentityProviderClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _headers(self, bearer: str | None = None) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {bearer or self.api_key}",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        bearer: str | None = None,
    ) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    method, path, json=json, params=params, headers=self._headers(bearer)
                )
        except httpx.TimeoutException:
            logger.warning("Identity provider timed out on %s %s", method, path)
            raise IdentityProviderError("Layanan autentikasi tidak merespons.")
        except httpx.RequestError as exc:
            logger.warning("Identity provider unreachable on %s %s: %s", method, path, exc)
            raise IdentityProviderError(f"Layanan autentikasi tidak dapat dihubungi: {exc}")

        if not response.is_success:
            raise IdentityProviderError(_error_message(response), response.status_code)
        if not response.content:
            return {}
        return response.json()

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        body = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        user = body.get("user") or {}
        return AuthSession(access_token=body["access_token"], email=user.get("email", email))

    async def sign_up(self, email: str, password: str, full_name: str) -> None:
        await self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": {"full_name": full_name}},
        )

    async def reset_password_for_email(self, email: str) -> None:
        await self._request("POST", "/recover", json={"email": email})

    async def verify_recovery_otp(self, email: str, token: str) -> AuthSession:
        """Verify a recovery code; the returned session authorizes the password update."""
        body = await self._request(
            "POST", "/verify", json={"email": email, "token": token, "type": "recovery"}
        )
        user = body.get("user") or {}
        return AuthSession(access_token=body["access_token"], email=user.get("email", email))

    async def update_password(self, access_token: str, new_password: str) -> None:
        await self._request("PUT", "/user", json={"password": new_password}, bearer=access_token)

    async def health(self) -> None:
        await self._request("GET", "/health")


@lru_cache()
def get_identity_provider() -> IdentityProviderClient:
    return IdentityProviderClient(
        settings.auth_url, settings.SUPABASE_ANON_KEY, timeout=settings.HTTP_TIMEOUT_SECONDS
    )
