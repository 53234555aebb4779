"""
Shared fixtures: the app wired to in-memory stand-ins for the identity
provider and the record store.
"""
from collections import Counter
from typing import Any

import httpx
import pytest
import pytest_asyncio

from mahasiswa_panel.clients.identity import AuthSession, get_identity_provider
from mahasiswa_panel.clients.records import get_record_store
from mahasiswa_panel.core.errors import IdentityProviderError, RecordStoreError
from mahasiswa_panel.main import app as panel_app

SESSION_TOKEN = "jwt-access-token"


class FakeIdentityProvider:
    def __init__(self):
        self.accounts: dict[str, str] = {"a@x.com": "secret"}
        self.profiles: dict[str, str] = {}
        self.reset_requests: list[str] = []
        self.valid_otp = "123456"
        self.update_error: str | None = None
        self.calls: Counter = Counter()

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        self.calls["sign_in"] += 1
        if self.accounts.get(email) != password:
            raise IdentityProviderError("Invalid login credentials", 400)
        return AuthSession(access_token=SESSION_TOKEN, email=email)

    async def sign_up(self, email: str, password: str, full_name: str) -> None:
        self.calls["sign_up"] += 1
        if email in self.accounts:
            raise IdentityProviderError("User already registered", 422)
        self.accounts[email] = password
        self.profiles[email] = full_name

    async def reset_password_for_email(self, email: str) -> None:
        self.calls["recover"] += 1
        self.reset_requests.append(email)

    async def verify_recovery_otp(self, email: str, token: str) -> AuthSession:
        self.calls["verify"] += 1
        if token != self.valid_otp:
            raise IdentityProviderError("Token has expired or is invalid", 403)
        return AuthSession(access_token=f"recovery-{email}", email=email)

    async def update_password(self, access_token: str, new_password: str) -> None:
        self.calls["update_user"] += 1
        if self.update_error:
            raise IdentityProviderError(self.update_error, 422)
        email = access_token.removeprefix("recovery-")
        self.accounts[email] = new_password

    async def health(self) -> None:
        self.calls["health"] += 1


class FakeRecordStore:
    def __init__(self):
        self.rows: dict[int, dict[str, Any]] = {}
        self.next_id = 1
        self.tokens: list[str | None] = []
        self.error: str | None = None
        self.error_status = 400
        self.calls: Counter = Counter()

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    def _track(self, operation: str, token: str | None) -> None:
        self.calls[operation] += 1
        self.tokens.append(token)
        if self.error:
            raise RecordStoreError(self.error, self.error_status)

    def seed(self, **row: Any) -> dict[str, Any]:
        stored = {"id": self.next_id, **row}
        self.rows[self.next_id] = stored
        self.next_id += 1
        return stored

    async def list_rows(self, token: str | None = None) -> list[dict[str, Any]]:
        self._track("list", token)
        return [dict(self.rows[key]) for key in sorted(self.rows)]

    async def insert_row(self, row: dict[str, Any], token: str | None = None) -> list[dict[str, Any]]:
        self._track("insert", token)
        return [dict(self.seed(**row))]

    async def update_row(
        self, row_id: int, row: dict[str, Any], token: str | None = None
    ) -> list[dict[str, Any]]:
        self._track("update", token)
        if row_id not in self.rows:
            return []
        self.rows[row_id].update(row)
        return [dict(self.rows[row_id])]

    async def delete_row(self, row_id: int, token: str | None = None) -> None:
        self._track("delete", token)
        self.rows.pop(row_id, None)

    async def health(self) -> None:
        self.calls["health"] += 1


@pytest.fixture
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def app(identity, store):
    panel_app.dependency_overrides[get_identity_provider] = lambda: identity
    panel_app.dependency_overrides[get_record_store] = lambda: store
    yield panel_app
    panel_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver"
    ) as c:
        yield c


@pytest_asyncio.fixture
async def authed_client(app):
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
        cookies={"session": SESSION_TOKEN},
    ) as c:
        yield c
