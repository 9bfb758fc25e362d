"""
Click recording and postback attribution.

Flow for a postback:
  1. Validate all four parameters (no store access on failure)
  2. Resolve click by (click_id, affiliate_id), the ownership boundary
  3. Insert a conversion referencing the click's surrogate id

There is deliberately no idempotency key: a repeated postback records
another conversion, because advertisers may report several per click.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from tracker.core import repository
from tracker.core.errors import UnknownClick, store_errors
from tracker.models.schemas import ClickOut, ClickParams, ConversionOut, PostbackParams

import structlog

logger = structlog.get_logger()


async def record_click(
    db: AsyncSession,
    affiliate_id: str | None,
    campaign_id: str | None,
    click_id: str | None,
) -> ClickOut:
    params = ClickParams.from_query(
        affiliate_id=affiliate_id,
        campaign_id=campaign_id,
        click_id=click_id,
    )

    with store_errors("record_click", "Failed to track click."):
        click = await repository.insert_click(
            db,
            affiliate_id=params.affiliate_id,
            campaign_id=params.campaign_id,
            click_id=params.click_id,
        )

    logger.info("click_recorded", click_id=click.click_id,
                affiliate=click.affiliate_id, campaign=click.campaign_id)
    return ClickOut.model_validate(click)


async def record_conversion(
    db: AsyncSession,
    affiliate_id: str | None,
    click_id: str | None,
    amount: str | None,
    currency: str | None,
) -> ConversionOut:
    params = PostbackParams.from_query(
        affiliate_id=affiliate_id,
        click_id=click_id,
        amount=amount,
        currency=currency,
    )

    with store_errors("record_conversion", "Failed to process postback."):
        click = await repository.find_click(db, click_id=params.click_id, affiliate_id=params.affiliate_id)
        if click is None:
            logger.warning("postback_unknown_click", click_id=params.click_id, affiliate=params.affiliate_id)
            raise UnknownClick()

        conversion = await repository.insert_conversion(
            db,
            click=click,
            affiliate_id=params.affiliate_id,
            amount=params.amount,
            currency=params.currency,
        )

    logger.info("conversion_recorded", click_id=click.click_id, click_ref=click.id,
                affiliate=params.affiliate_id, amount=str(params.amount), currency=params.currency)
    return ConversionOut.from_row(conversion, click_id=click.click_id)
