"""Catalog DTOs: validated, read-only views of stored and derived entities."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

IATA_AIRPORT_PATTERN = r"^[A-Z]{3}$"
IATA_AIRLINE_PATTERN = r"^[A-Z0-9]{2,3}$"


def _normalize_code(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip().upper()
        return value or None
    return value


def _zero_if_none(value: Any) -> Any:
    return 0 if value is None else value


class AirportRecord(BaseModel):
    """Airport row as seen by the indexing pipeline."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    iata: str = Field(pattern=IATA_AIRPORT_PATTERN)
    name: str | None = None
    city: str | None = None
    country: str | None = None
    departure_count: int = Field(default=0, ge=0)
    arrival_count: int = Field(default=0, ge=0)
    destinations_count: int = Field(default=0, ge=0)
    poi_count: int = Field(default=0, ge=0)
    terminals: list[Any] = Field(default_factory=list)
    latitude: float | None = None
    longitude: float | None = None
    updated_at: datetime | None = None

    @field_validator("iata", mode="before")
    @classmethod
    def normalize_iata(cls, value: Any) -> Any:
        return _normalize_code(value)

    @field_validator(
        "departure_count",
        "arrival_count",
        "destinations_count",
        "poi_count",
        mode="before",
    )
    @classmethod
    def default_counters(cls, value: Any) -> Any:
        return _zero_if_none(value)

    @field_validator("terminals", mode="before")
    @classmethod
    def default_terminals(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def has_activity(self) -> bool:
        return self.departure_count > 0 or self.arrival_count > 0


class RouteRecord(BaseModel):
    """Route row as seen by the indexing pipeline."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    origin_iata: str | None = Field(default=None, pattern=IATA_AIRPORT_PATTERN)
    destination_iata: str | None = Field(default=None, pattern=IATA_AIRPORT_PATTERN)
    destination_city: str | None = None
    flights_per_day: str | None = None
    has_flight_data: bool = False
    average_duration: str | None = None
    typical_duration: str | None = None
    updated_at: datetime | None = None

    @field_validator("origin_iata", "destination_iata", mode="before")
    @classmethod
    def normalize_codes(cls, value: Any) -> Any:
        return _normalize_code(value)

    @field_validator("has_flight_data", mode="before")
    @classmethod
    def default_flag(cls, value: Any) -> Any:
        return False if value is None else value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def route_key(self) -> str:
        """``ORIGIN-DEST`` key, matching the keys produced by correlation."""
        return f"{self.origin_iata}-{self.destination_iata}"

    @property
    def duration(self) -> str | None:
        return self.average_duration or self.typical_duration


class AirlineRecord(BaseModel):
    """Airline row; ``code`` is the IATA designator, falling back to ``code``."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    iata: str | None = Field(default=None, pattern=IATA_AIRLINE_PATTERN)
    code: str | None = Field(default=None, pattern=IATA_AIRLINE_PATTERN)
    name: str | None = None
    country: str | None = None
    updated_at: datetime | None = None

    @field_validator("iata", "code", mode="before")
    @classmethod
    def normalize_codes(cls, value: Any) -> Any:
        return _normalize_code(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def key(self) -> str | None:
        return self.iata or self.code


class FlightLegRecord(BaseModel):
    """One scheduled leg. Codes may be missing in raw feeds."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    airline_iata: str | None = None
    origin_iata: str | None = None
    destination_iata: str | None = None

    @field_validator(
        "airline_iata", "origin_iata", "destination_iata", mode="before"
    )
    @classmethod
    def normalize_codes(cls, value: Any) -> Any:
        return _normalize_code(value)


class AirlineRouteLink(BaseModel):
    """Derived relation: airline operates legs on a route."""

    model_config = ConfigDict(frozen=True)

    airline_code: str
    origin_iata: str
    destination_iata: str

    @property
    def route_key(self) -> str:
        return f"{self.origin_iata}-{self.destination_iata}"


class AirlineAirportLink(BaseModel):
    """Derived relation: airline operates legs touching an airport."""

    model_config = ConfigDict(frozen=True)

    airline_code: str
    airport_iata: str
