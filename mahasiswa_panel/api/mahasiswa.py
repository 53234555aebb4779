"""
Mahasiswa Panel — Student record API

Every route sits behind SessionCookieMiddleware, which has already put the
session token on request.state.
"""
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from mahasiswa_panel.api.auth import clear_session_cookie
from mahasiswa_panel.clients.records import RecordStoreClient, get_record_store
from mahasiswa_panel.core.config import get_settings
from mahasiswa_panel.core.errors import RecordStoreError
from mahasiswa_panel.schemas.auth import MessageResponse
from mahasiswa_panel.schemas.mahasiswa import MahasiswaPayload, MahasiswaWriteResponse

settings = get_settings()
router = APIRouter(prefix="/api/mahasiswa", tags=["mahasiswa"])


def _store_token(request: Request) -> str | None:
    if not settings.FORWARD_SESSION_TOKEN:
        return None
    return getattr(request.state, "session_token", None)


def _store_failure(exc: RecordStoreError) -> HTTPException:
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        # forwarded session token rejected (expired or forged); drop the stale cookie
        cleared = Response()
        clear_session_cookie(cleared)
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"set-cookie": cleared.headers["set-cookie"]},
        )
    if exc.unreachable:
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message)


@router.get("", response_model=list[dict[str, Any]])
async def list_mahasiswa(request: Request, store: RecordStoreClient = Depends(get_record_store)):
    """All records, ordered by id ascending."""
    try:
        return await store.list_rows(token=_store_token(request))
    except RecordStoreError as exc:
        raise _store_failure(exc)


@router.post("", response_model=MahasiswaWriteResponse)
async def create_mahasiswa(
    payload: MahasiswaPayload,
    request: Request,
    store: RecordStoreClient = Depends(get_record_store),
):
    try:
        data = await store.insert_row(payload.to_row(), token=_store_token(request))
    except RecordStoreError as exc:
        raise _store_failure(exc)
    return MahasiswaWriteResponse(message="Data berhasil ditambahkan", data=data)


@router.put("/{mahasiswa_id}", response_model=MahasiswaWriteResponse)
async def update_mahasiswa(
    mahasiswa_id: int,
    payload: MahasiswaPayload,
    request: Request,
    store: RecordStoreClient = Depends(get_record_store),
):
    """Overwrite the record with this id; matching nothing is not an error."""
    try:
        data = await store.update_row(mahasiswa_id, payload.to_row(), token=_store_token(request))
    except RecordStoreError as exc:
        raise _store_failure(exc)
    return MahasiswaWriteResponse(message="Data berhasil diperbarui", data=data)


@router.delete("/{mahasiswa_id}", response_model=MessageResponse)
async def delete_mahasiswa(
    mahasiswa_id: int,
    request: Request,
    store: RecordStoreClient = Depends(get_record_store),
):
    try:
        await store.delete_row(mahasiswa_id, token=_store_token(request))
    except RecordStoreError as exc:
        raise _store_failure(exc)
    return MessageResponse(message="Data berhasil dihapus")
