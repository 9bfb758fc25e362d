"""
Request / response schemas.

Inputs arrive as query-string values. Blank values count as missing, and
every field is validated before any store interaction.
"""

import datetime
from decimal import Decimal
from typing import ClassVar

from pydantic import BaseModel, ValidationError, field_validator

from tracker.core.errors import InvalidRequest
from tracker.models.tables import Conversion

# PostgreSQL NUMERIC limits: digits before and after the decimal point.
MAX_INTEGER_DIGITS = 131072
MAX_FRACTION_DIGITS = 16383


def _as_utc(value: datetime.datetime) -> datetime.datetime:
    """Stores without tz support hand back naive UTC; make every timestamp aware."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


# --- Request schemas ---

class QueryParams(BaseModel):
    """Required, non-empty query-string parameters."""

    malformed_message: ClassVar[str] = "Missing required parameters."

    model_config = {"str_strip_whitespace": True, "str_min_length": 1}

    @classmethod
    def from_query(cls, **params: str | None):
        cleaned = {k: v.strip() for k, v in params.items() if v is not None and v.strip()}
        try:
            return cls.model_validate(cleaned)
        except ValidationError as e:
            if any(err["type"] == "missing" for err in e.errors()):
                raise InvalidRequest() from e
            raise InvalidRequest(cls.malformed_message) from e


class ClickParams(QueryParams):
    affiliate_id: str
    campaign_id: str
    click_id: str


class PostbackParams(QueryParams):
    # Only amount can fail once presence is checked; no range or currency-code checks.
    malformed_message: ClassVar[str] = "Invalid amount."

    affiliate_id: str
    click_id: str
    amount: Decimal
    currency: str

    @field_validator("amount")
    @classmethod
    def amount_fits_numeric(cls, v: Decimal) -> Decimal:
        if v.adjusted() >= MAX_INTEGER_DIGITS or -v.as_tuple().exponent > MAX_FRACTION_DIGITS:
            raise ValueError("amount out of storable range")
        return v


# --- Response schemas ---

class ClickOut(BaseModel):
    id: int
    affiliate_id: str
    campaign_id: str
    click_id: str
    created_at: datetime.datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: datetime.datetime) -> datetime.datetime:
        return _as_utc(v)


class ConversionOut(BaseModel):
    id: int
    click_ref: int
    click_id: str | None = None  # external id of the referenced click
    affiliate_id: str
    amount: Decimal
    currency: str
    created_at: datetime.datetime

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: datetime.datetime) -> datetime.datetime:
        return _as_utc(v)

    @classmethod
    def from_row(cls, conversion: Conversion, click_id: str | None = None) -> "ConversionOut":
        return cls(
            id=conversion.id,
            click_ref=conversion.click_ref,
            click_id=click_id,
            affiliate_id=conversion.affiliate_id,
            amount=conversion.amount,
            currency=conversion.currency,
            created_at=conversion.created_at,
        )
