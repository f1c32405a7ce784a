"""Flight leg model."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UUIDPrimaryKeyMixin


class FlightLeg(UUIDPrimaryKeyMixin, Base):
    """Flight legs table - raw scheduled departures as ingested.

    Codes are nullable because upstream feeds occasionally omit them; such
    legs are ignored when airline relations are derived.
    """

    __tablename__ = "flight_legs"

    airline_iata: Mapped[str | None] = mapped_column(String(3))
    flight_number: Mapped[str | None] = mapped_column(String(10))
    origin_iata: Mapped[str | None] = mapped_column(String(3))
    destination_iata: Mapped[str | None] = mapped_column(String(3))
    departure_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    __table_args__ = (
        Index("ix_flight_legs_airline_iata", "airline_iata"),
        Index(
            "ix_flight_legs_origin_destination",
            "origin_iata",
            "destination_iata",
        ),
        Index("ix_flight_legs_departure_time", "departure_time"),
    )

    def __repr__(self) -> str:
        return (
            f"<FlightLeg {self.airline_iata}{self.flight_number or ''} "
            f"{self.origin_iata}-{self.destination_iata}>"
        )
