"""SQLAlchemy models for the reward flight snapshot tables."""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


class Base(DeclarativeBase):
    pass


class RewardFlightLatest(Base):
    __tablename__ = "reward_flights_latest"

    id: Mapped[int] = mapped_column(primary_key=True)
    origin: Mapped[str] = mapped_column(String(3), nullable=False, index=True)
    destination: Mapped[str] = mapped_column(String(3), nullable=False, index=True)
    departure: Mapped[date] = mapped_column(Date, nullable=False)
    carrier_code: Mapped[str] = mapped_column(String(3), nullable=False)
    scraped_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class _AwardColumns:
    """Columns shared by the four per-cabin award tables."""

    id: Mapped[int] = mapped_column(primary_key=True)
    cabin_points_value: Mapped[Optional[int]] = mapped_column(Integer)
    is_saver_award: Mapped[Optional[bool]] = mapped_column(Boolean)
    cabin_class_seat_count: Mapped[Optional[int]] = mapped_column(Integer)
    cabin_class_seat_count_string: Mapped[Optional[str]] = mapped_column(String(10))

    @declared_attr
    def flight_id(cls) -> Mapped[int]:
        return mapped_column(
            ForeignKey("reward_flights_latest.id", ondelete="CASCADE"), nullable=False
        )


class AwardEconomy(_AwardColumns, Base):
    __tablename__ = "award_economy"
    __table_args__ = (UniqueConstraint("flight_id", name="uq_award_economy_flight"),)


class AwardPremiumEconomy(_AwardColumns, Base):
    __tablename__ = "award_premium_economy"
    __table_args__ = (UniqueConstraint("flight_id", name="uq_award_premium_economy_flight"),)


class AwardBusiness(_AwardColumns, Base):
    __tablename__ = "award_business"
    __table_args__ = (UniqueConstraint("flight_id", name="uq_award_business_flight"),)


class AwardFirst(_AwardColumns, Base):
    __tablename__ = "award_first"
    __table_args__ = (UniqueConstraint("flight_id", name="uq_award_first_flight"),)
