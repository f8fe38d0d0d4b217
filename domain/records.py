from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field


def _format_cost(value: float) -> str:
    # Plain decimal at any magnitude, at most two places.
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


class RouteRecord(BaseModel):
    """Read model for a travel route returned by the migration queries."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: str = Field(..., description="Route identifier (UUID string)")
    title: str | None = None
    region: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    duration_days: int | None = None
    planned_nights: int | None = None
    flight_cost: float | None = None
    hotel_cost: float | None = None
    total_cost: float | None = None
    created_at: datetime | None = None

    def describe(self) -> str:
        """One diagnostic line; absent fields are left out."""

        label = self.title or self.id
        if self.total_cost is None:
            return f"- {label}"
        return f"- {label}: €{_format_cost(self.total_cost)}"


class StopRecord(BaseModel):
    """Read model for a stop on a travel route."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: str
    route_id: str | None = None
    location: str | None = None
    country: str | None = None
    nights: int | None = None
    hotel_cost: float | None = None
    notes: str | None = None

    def describe(self) -> str:
        place = ", ".join(part for part in (self.location, self.country) if part) or self.id
        if self.nights is None:
            return f"- {place}"
        suffix = "night" if self.nights == 1 else "nights"
        return f"- {place}: {self.nights} {suffix}"


def route_from_mapping(data: Mapping[str, Any]) -> RouteRecord:
    return RouteRecord.model_validate(dict(data))


def stop_from_mapping(data: Mapping[str, Any]) -> StopRecord:
    return StopRecord.model_validate(dict(data))
