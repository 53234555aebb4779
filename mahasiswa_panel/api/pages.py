"""
Mahasiswa Panel — HTML pages
"""
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, RedirectResponse

from mahasiswa_panel.core.config import get_settings

settings = get_settings()
router = APIRouter(tags=["pages"], include_in_schema=False)

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


@router.get("/")
async def login_page():
    return FileResponse(STATIC_DIR / "login.html")


@router.get("/register")
async def register_page():
    return FileResponse(STATIC_DIR / "register.html")


@router.get("/reset-password")
async def reset_password_page():
    return FileResponse(STATIC_DIR / "resetpassword.html")


@router.get("/dashboard")
async def dashboard_page(request: Request):
    if not request.cookies.get(settings.SESSION_COOKIE_NAME):
        return RedirectResponse("/", status_code=302)
    return FileResponse(STATIC_DIR / "dashboard.html")
