"""
Mahasiswa Panel — Record Store client (Supabase PostgREST API)

Rows are addressed by exact match on the numeric `id` column. Update and
delete on a missing id match zero rows, which PostgREST reports as success.
"""
import logging
from functools import lru_cache
from typing import Any

import httpx

from mahasiswa_panel.core.config import get_settings
from mahasiswa_panel.core.errors import RecordStoreError

settings = get_settings()
logger = logging.getLogger(__name__)

Row = dict[str, Any]


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("message", "details", "hint", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code}"


class RecordStoreClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.table = table
        self.timeout = timeout
        self._transport = transport

    def _headers(self, token: str | None, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {token or self.api_key}",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None,
        params: dict[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    method, path, params=params, json=json, headers=self._headers(token, prefer)
                )
        except httpx.TimeoutException:
            logger.warning("Record store timed out on %s %s", method, path)
            raise RecordStoreError("Record store tidak merespons.")
        except httpx.RequestError as exc:
            logger.warning("Record store unreachable on %s %s: %s", method, path, exc)
            raise RecordStoreError(f"Record store tidak dapat dihubungi: {exc}")

        if not response.is_success:
            message = _error_message(response)
            logger.warning("Record store rejected %s %s (%d): %s", method, path, response.status_code, message)
            raise RecordStoreError(message, response.status_code)
        if not response.content:
            return None
        return response.json()

    @property
    def _path(self) -> str:
        return f"/{self.table}"

    async def list_rows(self, token: str | None = None) -> list[Row]:
        rows = await self._request(
            "GET", self._path, token=token, params={"select": "*", "order": "id.asc"}
        )
        return rows or []

    async def insert_row(self, row: Row, token: str | None = None) -> list[Row]:
        rows = await self._request(
            "POST", self._path, token=token, json=[row], prefer="return=representation"
        )
        return rows or []

    async def update_row(self, row_id: int, row: Row, token: str | None = None) -> list[Row]:
        rows = await self._request(
            "PATCH",
            self._path,
            token=token,
            params={"id": f"eq.{row_id}"},
            json=row,
            prefer="return=representation",
        )
        return rows or []

    async def delete_row(self, row_id: int, token: str | None = None) -> None:
        await self._request("DELETE", self._path, token=token, params={"id": f"eq.{row_id}"})

    async def health(self) -> None:
        await self._request("GET", "/", token=None)


@lru_cache()
def get_record_store() -> RecordStoreClient:
    return RecordStoreClient(
        settings.rest_url,
        settings.SUPABASE_ANON_KEY,
        settings.RECORD_TABLE,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )
