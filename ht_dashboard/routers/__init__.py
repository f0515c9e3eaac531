"""API routers."""

from fastapi import APIRouter

from . import db_browser, formations, matches, players, sync

router = APIRouter(prefix="/api")
router.include_router(sync.router, prefix="/sync", tags=["sync"])
router.include_router(players.router, prefix="/players", tags=["players"])
router.include_router(matches.router, prefix="/matches", tags=["matches"])
router.include_router(formations.router, prefix="/formations", tags=["formations"])
router.include_router(db_browser.router, prefix="/db-browser", tags=["db-browser"])

__all__ = ["router"]
