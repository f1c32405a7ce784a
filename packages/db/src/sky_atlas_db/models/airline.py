"""Airline model."""

from __future__ import annotations

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Airline(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Airlines table - stores airline reference data."""

    __tablename__ = "airlines"

    iata: Mapped[str | None] = mapped_column(String(3), unique=True)
    code: Mapped[str | None] = mapped_column(String(3))
    name: Mapped[str | None] = mapped_column(String(255))
    country: Mapped[str | None] = mapped_column(String(100))

    __table_args__ = (
        Index("ix_airlines_iata", "iata"),
        Index("ix_airlines_code", "code"),
    )

    def __repr__(self) -> str:
        return f"<Airline {self.iata or self.code} ({self.name})>"
