from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, Response

PAGES_DIR = Path(__file__).resolve().parent / "pages"

router = APIRouter(
    prefix="/reseller",
    tags=["Dashboard"],
    include_in_schema=False,
)


@lru_cache(maxsize=None)
def load_page(filename: str) -> str:
    return (PAGES_DIR / filename).read_text(encoding="utf-8")


@router.get("/analytics", response_class=HTMLResponse)
async def analytics_page():
    return HTMLResponse(load_page("analytics.html"))


@router.get("/settings", response_class=HTMLResponse)
async def settings_page():
    return HTMLResponse(load_page("settings.html"))


@router.get("/session.js")
async def session_script():
    return Response(load_page("session.js"), media_type="application/javascript")
