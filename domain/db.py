from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime, timezone
from enum import Enum
from typing import Iterator, Sequence
from uuid import uuid4

from sqlalchemy import Column, String, Table
from sqlalchemy.engine import Engine
from sqlmodel import Field, Session, SQLModel, create_engine

DATABASE_URL = "sqlite:///pathfinder.db"


def _make_engine(url: str) -> Engine:
    return create_engine(
        url,
        echo=False,
        connect_args={"check_same_thread": False},
    )


engine = _make_engine(DATABASE_URL)


def _new_id() -> str:
    return str(uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BookingTypeEnum(str, Enum):
    """Kinds of bookings attached to a travel stop."""

    FLIGHT = "flight"
    HOTEL = "hotel"
    TRAIN = "train"
    OTHER = "other"


class TravelRouteRow(SQLModel, table=True):
    """A planned multi-stop trip."""

    __tablename__ = "travel_routes"

    id: str = Field(default_factory=_new_id, primary_key=True)
    title: str = Field(index=True)
    region: str | None = None
    start_date: date
    end_date: date
    duration_days: int | None = Field(default=None, ge=0)
    planned_nights: int | None = Field(default=None, ge=0)
    flight_cost: float | None = Field(default=None, ge=0)
    hotel_cost: float | None = Field(default=None, ge=0)
    total_cost: float | None = Field(default=None, ge=0)
    created_at: datetime = Field(default_factory=_utc_now)


class TravelStopRow(SQLModel, table=True):
    """One destination on a travel route."""

    __tablename__ = "travel_stops"

    id: str = Field(default_factory=_new_id, primary_key=True)
    route_id: str = Field(foreign_key="travel_routes.id", index=True)
    location: str
    country: str | None = None
    nights: int | None = Field(default=None, ge=0)
    hotel_cost: float | None = Field(default=None, ge=0)
    notes: str | None = None


class TravelBookingRow(SQLModel, table=True):
    """A flight, hotel or other reservation made for a stop."""

    __tablename__ = "travel_bookings"

    id: str = Field(default_factory=_new_id, primary_key=True)
    stop_id: str = Field(foreign_key="travel_stops.id", index=True)
    type: BookingTypeEnum = Field(sa_column=Column(String(length=16), nullable=False))
    provider: str | None = None
    cost: float | None = Field(default=None, ge=0)
    booking_ref: str | None = None


class AppSettingRow(SQLModel, table=True):
    """Simple key/value store for UI and application preferences."""

    __tablename__ = "app_settings"

    key: str = Field(primary_key=True)
    value: str = Field(sa_column=Column(String, nullable=False))


def configure_engine(url: str) -> Engine:
    """Rebind the module engine to *url* (e.g. the per-user database file)."""

    global engine
    engine.dispose()
    engine = _make_engine(url)
    return engine


def create_all(tables: Sequence[Table] | None = None) -> None:
    """Create SQLModel tables (all of them by default) in the configured database."""

    SQLModel.metadata.create_all(engine, tables=list(tables) if tables is not None else None)


@contextmanager
def get_session() -> Iterator[Session]:
    """Yield a transactional session bound to the configured engine."""

    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
