"""
Price observation model: one timestamped price reading for a flight.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from flight_tracker.models.base import Base


class Observation(Base):
    """
    Append-only price reading.

    observed_at_utc is always written as UTC. Backends without time zone
    support (SQLite) hand it back naive, so readers treat naive values as UTC.
    """

    __tablename__ = "observations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    flight_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("flights.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    observed_at_utc: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    price_chf: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, comment="Price in CHF"
    )

    flight: Mapped["Flight"] = relationship(
        "Flight", back_populates="observations", lazy="raise"
    )

    def __repr__(self) -> str:
        return (
            f"<Observation(id={self.id}, flight_id={self.flight_id}, "
            f"price={self.price_chf} CHF, at={self.observed_at_utc})>"
        )
