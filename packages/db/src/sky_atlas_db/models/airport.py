"""Airport model."""

from __future__ import annotations

from sqlalchemy import JSON, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Airport(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Airports table - airport reference data with aggregate counters.

    Rows are written by the external ingestion job; this service only reads
    them.
    """

    __tablename__ = "airports"

    iata: Mapped[str] = mapped_column(String(3), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(255))
    country: Mapped[str | None] = mapped_column(String(100))
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)

    # Aggregates maintained by ingestion
    departure_count: Mapped[int | None] = mapped_column(Integer, default=0)
    arrival_count: Mapped[int | None] = mapped_column(Integer, default=0)
    destinations_count: Mapped[int | None] = mapped_column(Integer, default=0)
    poi_count: Mapped[int | None] = mapped_column(Integer, default=0)
    terminals: Mapped[list | None] = mapped_column(JSON)

    __table_args__ = (
        Index("ix_airports_iata", "iata"),
        Index("ix_airports_departure_count", "departure_count"),
        Index("ix_airports_country", "country"),
    )

    def __repr__(self) -> str:
        return f"<Airport {self.iata} ({self.city})>"
