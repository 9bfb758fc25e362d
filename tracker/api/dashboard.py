"""
Dashboard API: read-only lists consumed by the dashboard frontend.
Scoped by the affiliate id in the path; no auth, no pagination.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.core.queries import list_clicks, list_conversions
from tracker.models.database import get_db

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/clicks/{affiliate_id}")
async def dashboard_clicks(affiliate_id: str, db: AsyncSession = Depends(get_db)):
    """All clicks for the affiliate, newest first."""
    clicks = await list_clicks(db, affiliate_id)
    return {"status": "success", "data": [c.model_dump(mode="json") for c in clicks]}


@router.get("/conversions/{affiliate_id}")
async def dashboard_conversions(affiliate_id: str, db: AsyncSession = Depends(get_db)):
    """All conversions for the affiliate, newest first."""
    conversions = await list_conversions(db, affiliate_id)
    return {"status": "success", "data": [c.model_dump(mode="json") for c in conversions]}
