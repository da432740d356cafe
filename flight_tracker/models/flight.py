"""
Flight model for tracked flight instances.
"""

from datetime import datetime
from typing import List

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from flight_tracker.models.base import Base


class Flight(Base):
    """
    A scheduled flight instance that accumulates price observations.

    The tuple (flight_number, departure calendar day, origin_iata,
    destination_iata) is unique per day. Uniqueness is kept by the
    find-or-create lookup in FlightQueryService, not by a table constraint.

    Attributes:
        id: Unique flight ID (auto-increment)
        flight_number: Free-text flight number, may combine legs ("LX318/LX40")
        departure_date: Naive departure date and time, matched by calendar day
        origin_iata: Origin airport IATA code
        destination_iata: Destination airport IATA code
        observations: Price observations recorded for this flight

    Examples:
        >>> flight = Flight(
        ...     flight_number="LX1070",
        ...     departure_date=datetime(2026, 2, 15),
        ...     origin_iata="ZRH",
        ...     destination_iata="BCN",
        ... )
    """

    __tablename__ = "flights"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    flight_number: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    departure_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    origin_iata: Mapped[str] = mapped_column(String(3), nullable=False, index=True)
    destination_iata: Mapped[str] = mapped_column(String(3), nullable=False, index=True)

    observations: Mapped[List["Observation"]] = relationship(
        "Observation", back_populates="flight", lazy="raise"
    )

    def __repr__(self) -> str:
        return (
            f"<Flight(id={self.id}, {self.flight_number} "
            f"{self.origin_iata}->{self.destination_iata}, "
            f"departure={self.departure_date.date() if self.departure_date else 'N/A'})>"
        )

    @property
    def route(self) -> str:
        """
        Return route code in IATA format (e.g., 'ZRH-JFK').
        """
        return f"{self.origin_iata}-{self.destination_iata}"
