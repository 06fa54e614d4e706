from fastapi import APIRouter

from app.core.config import settings
from app.core.version import __version__

router = APIRouter(tags=["health"])


@router.get("/health", summary="Simple readiness probe")
async def health_check() -> dict[str, str]:
    return {"status": "ok", "store": settings.STORE_BACKEND, "version": __version__}
