"""
Tracking endpoints: /click and /postback.

Both are GET with query-string parameters so they can be fired from
tracking links and advertiser postback URLs. Parameters are declared
optional here; presence is enforced by the request schemas so a missing
value yields the 400 envelope rather than FastAPI's 422.

No authentication: any caller may claim any affiliate_id.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.core.attribution import record_click, record_conversion
from tracker.models.database import get_db

router = APIRouter(tags=["tracking"])


@router.get("/click")
async def track_click(
    affiliate_id: str | None = None,
    campaign_id: str | None = None,
    click_id: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    click = await record_click(db, affiliate_id, campaign_id, click_id)
    return {
        "status": "success",
        "message": "Click tracked successfully.",
        "data": click.model_dump(mode="json"),
    }


@router.get("/postback")
async def track_postback(
    affiliate_id: str | None = None,
    click_id: str | None = None,
    amount: str | None = None,
    currency: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    conversion = await record_conversion(db, affiliate_id, click_id, amount, currency)
    return {
        "status": "success",
        "message": "Conversion tracked",
        "data": conversion.model_dump(mode="json"),
    }
