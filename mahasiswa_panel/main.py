"""
Mahasiswa Panel — FastAPI application entrypoint
"""
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from prometheus_fastapi_instrumentator import Instrumentator

from mahasiswa_panel.core.config import configure_logging, get_settings
from mahasiswa_panel.core.errors import register_error_handlers
from mahasiswa_panel.middleware.session import SessionCookieMiddleware
from mahasiswa_panel.api import auth, health, mahasiswa, pages
from mahasiswa_panel.api.pages import STATIC_DIR

settings = get_settings()

configure_logging()

app = FastAPI(
    title="Mahasiswa Panel",
    description="Student records dashboard backed by Supabase auth and a PostgREST table.",
    version=settings.SERVICE_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url=None,
)

# ── Session Gate ──────────────────────────────────────────────────────────────
app.add_middleware(SessionCookieMiddleware)

# ── Errors ────────────────────────────────────────────────────────────────────
register_error_handlers(app)

# ── Prometheus Metrics ────────────────────────────────────────────────────────
if settings.METRICS_ENABLED:
    Instrumentator().instrument(app).expose(app, endpoint="/metrics")

# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(auth.router)
app.include_router(mahasiswa.router)
app.include_router(health.router)
app.include_router(pages.router)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
