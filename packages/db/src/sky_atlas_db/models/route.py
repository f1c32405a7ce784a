"""Route model."""

from __future__ import annotations

from sqlalchemy import Boolean, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Route(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Routes table - one row per directional origin/destination pair."""

    __tablename__ = "routes"

    origin_iata: Mapped[str] = mapped_column(String(3), nullable=False)
    destination_iata: Mapped[str] = mapped_column(String(3), nullable=False)
    destination_city: Mapped[str | None] = mapped_column(String(255))

    # Human-readable frequency descriptor, e.g. "12 flights" or "3-5 flights"
    flights_per_day: Mapped[str | None] = mapped_column(String(50))
    has_flight_data: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    average_duration: Mapped[str | None] = mapped_column(String(50))
    typical_duration: Mapped[str | None] = mapped_column(String(50))

    __table_args__ = (
        UniqueConstraint(
            "origin_iata", "destination_iata", name="uq_routes_origin_destination"
        ),
        Index("ix_routes_has_flight_data", "has_flight_data"),
        Index("ix_routes_origin_iata", "origin_iata"),
    )

    def __repr__(self) -> str:
        return f"<Route {self.origin_iata}-{self.destination_iata}>"
