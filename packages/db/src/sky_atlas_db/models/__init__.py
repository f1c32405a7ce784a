"""SQLAlchemy ORM models for Sky Atlas."""

from .airline import Airline
from .airport import Airport
from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from .flight_leg import FlightLeg
from .route import Route

__all__ = [
    "Airline",
    "Airport",
    "Base",
    "FlightLeg",
    "Route",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
]
