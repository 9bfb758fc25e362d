"""Read-only views for the dashboard. Full history, newest first, no paging."""

from sqlalchemy.ext.asyncio import AsyncSession

from tracker.core import repository
from tracker.core.errors import store_errors
from tracker.models.schemas import ClickOut, ConversionOut


async def list_clicks(db: AsyncSession, affiliate_id: str) -> list[ClickOut]:
    with store_errors("list_clicks"):
        clicks = await repository.clicks_for_affiliate(db, affiliate_id)
    return [ClickOut.model_validate(c) for c in clicks]


async def list_conversions(db: AsyncSession, affiliate_id: str) -> list[ConversionOut]:
    with store_errors("list_conversions"):
        rows = await repository.conversions_for_affiliate(db, affiliate_id)
    return [ConversionOut.from_row(conversion, click_id=click_id) for conversion, click_id in rows]
