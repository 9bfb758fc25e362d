"""
Data access for clicks and conversions.

The only module that issues statements against the store. Callers wrap
these in tracker.core.errors.store_errors to map driver failures.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.core.errors import DuplicateClick
from tracker.models.tables import Click, Conversion

import structlog

logger = structlog.get_logger()


async def insert_click(db: AsyncSession, affiliate_id: str, campaign_id: str, click_id: str) -> Click:
    """Insert and commit. The unique index on click_id decides duplicates.

    The row is refreshed so callers see the values as the store holds them.
    """
    click = Click(
        affiliate_id=affiliate_id,
        campaign_id=campaign_id,
        click_id=click_id,
    )
    db.add(click)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.info("click_duplicate", click_id=click_id, affiliate=affiliate_id, error=str(e.orig))
        raise DuplicateClick() from e
    await db.refresh(click)
    return click


async def find_click(db: AsyncSession, click_id: str, affiliate_id: str) -> Click | None:
    """Resolve a click by external id AND owner. Newest wins if several match."""
    stmt = (
        select(Click)
        .where(
            Click.click_id == click_id,
            Click.affiliate_id == affiliate_id,
        )
        .order_by(Click.created_at.desc(), Click.id.desc())
        .limit(1)
    )
    result = await db.execute(stmt)
    return result.scalars().first()


async def insert_conversion(db: AsyncSession, click: Click, affiliate_id: str, amount, currency: str) -> Conversion:
    conversion = Conversion(
        click_ref=click.id,
        affiliate_id=affiliate_id,
        amount=amount,
        currency=currency,
    )
    db.add(conversion)
    await db.commit()
    await db.refresh(conversion)
    return conversion


async def clicks_for_affiliate(db: AsyncSession, affiliate_id: str) -> list[Click]:
    stmt = (
        select(Click)
        .where(Click.affiliate_id == affiliate_id)
        .order_by(Click.created_at.desc(), Click.id.desc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def conversions_for_affiliate(db: AsyncSession, affiliate_id: str) -> list[tuple[Conversion, str]]:
    """Conversions paired with the external click_id they were attributed to."""
    stmt = (
        select(Conversion, Click.click_id)
        .join(Click, Conversion.click_ref == Click.id)
        .where(Conversion.affiliate_id == affiliate_id)
        .order_by(Conversion.created_at.desc(), Conversion.id.desc())
    )
    result = await db.execute(stmt)
    return [(row[0], row[1]) for row in result.all()]
