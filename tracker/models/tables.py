"""
Database models.

Design principles:
  - Both tables are append-only (no updates/deletes from this service)
  - clicks.click_id is globally unique; the constraint is the only dedupe
  - conversions reference clicks by surrogate id, never by external click_id
  - caller-supplied ids and currency are opaque Text, stored at any length
"""

import datetime

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class Base(DeclarativeBase):
    pass


class Click(Base):
    """One row per tracked click. Created by GET /click."""
    __tablename__ = "clicks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    affiliate_id = Column(Text, nullable=False)
    campaign_id = Column(Text, nullable=False)
    click_id = Column(Text, nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now())

    __table_args__ = (
        Index("ix_clicks_affiliate_created", "affiliate_id", "created_at"),
    )


class Conversion(Base):
    """One row per accepted postback. A click may convert more than once."""
    __tablename__ = "conversions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    click_ref = Column(Integer, ForeignKey("clicks.id"), nullable=False, index=True)
    affiliate_id = Column(Text, nullable=False)
    amount = Column(Numeric, nullable=False)             # unconstrained: stored as sent
    currency = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now())

    __table_args__ = (
        Index("ix_conversions_affiliate_created", "affiliate_id", "created_at"),
    )
