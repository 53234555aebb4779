"""
Mahasiswa Panel — Health endpoint
"""
import asyncio

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from mahasiswa_panel.clients.identity import IdentityProviderClient, get_identity_provider
from mahasiswa_panel.clients.records import RecordStoreClient, get_record_store
from mahasiswa_panel.core.config import get_settings
from mahasiswa_panel.schemas.auth import HealthResponse

settings = get_settings()
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    identity: IdentityProviderClient = Depends(get_identity_provider),
    store: RecordStoreClient = Depends(get_record_store),
):
    """
    Deep health check — verifies the identity provider and record store answer.
    Returns 200 if both are healthy, 503 otherwise.
    """
    deps: dict[str, str] = {}
    healthy = True

    for name, check in [("identity-provider", identity.health), ("record-store", store.health)]:
        try:
            await asyncio.wait_for(check(), timeout=settings.HEALTH_CHECK_TIMEOUT)
            deps[name] = "ok"
        except Exception as e:
            deps[name] = f"error: {str(e)[:100]}"
            healthy = False

    response = HealthResponse(
        status="healthy" if healthy else "degraded",
        service=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        dependencies=deps,
    )

    return JSONResponse(
        content=response.model_dump(),
        status_code=200 if healthy else 503,
    )
