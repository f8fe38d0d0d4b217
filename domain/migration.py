from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Sequence

from pydantic import ValidationError
from sqlalchemy import func, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

import domain.db as db
from domain import settings
from domain.db import AppSettingRow, TravelBookingRow, TravelRouteRow, TravelStopRow
from domain.records import RouteRecord, StopRecord

LOGGER = logging.getLogger("domain.migration")

READY_STATUS = "Ready to migrate"
MIGRATION_VERSION = 1
MIGRATION_VERSION_KEY = "migration.travel_routes.version"

StatusCallback = Callable[[str, bool], None]


class MigrationError(Exception):
    """Base error for the travel routes migration."""


class InsertionError(MigrationError):
    pass


class QueryError(MigrationError):
    pass


class VerificationError(MigrationError):
    pass


def status_message(error: BaseException) -> str:
    """First line of *error* for status text; SQL and doc links stay in the log."""

    lines = str(error).strip().splitlines()
    return lines[0] if lines else type(error).__name__


@dataclass(frozen=True)
class SampleStop:
    location: str
    country: str
    nights: int
    hotel_cost: float
    notes: str


@dataclass(frozen=True)
class SampleRoute:
    title: str
    region: str
    start_date: date
    end_date: date
    duration_days: int
    planned_nights: int
    flight_cost: float
    hotel_cost: float
    total_cost: float
    stops: Sequence[SampleStop] = ()


ASIA_ROUTE_2026 = SampleRoute(
    title="Asia Route 2026",
    region="Asia",
    start_date=date(2026, 3, 1),
    end_date=date(2026, 3, 21),
    duration_days=21,
    planned_nights=20,
    flight_cost=1200,
    hotel_cost=1800,
    total_cost=3000,
    stops=(
        SampleStop("Bangkok", "Thailand", 3, 250, "Capital city with amazing street food"),
        SampleStop("Singapore", "Singapore", 2, 300, "Modern city-state with diverse culture"),
        SampleStop("Bali", "Indonesia", 7, 600, "Tropical paradise with beautiful beaches"),
        SampleStop("Tokyo", "Japan", 4, 400, "Bustling metropolis with rich history"),
        SampleStop("Seoul", "South Korea", 4, 250, "Dynamic city blending tradition and modernity"),
    ),
)


@dataclass(frozen=True)
class MigrationSummary:
    routes: int
    stops: int
    bookings: int


class MigrationManager:
    """Creates the travel route tables, seeds them once and answers test queries.

    Status and the ``is_migrating`` flag are observable through
    :meth:`subscribe`. Callbacks run on whichever thread changed the status;
    UI code is expected to marshal them onto its own thread.
    """

    def __init__(
        self,
        engine: Engine | None = None,
        *,
        sample_route: SampleRoute = ASIA_ROUTE_2026,
    ) -> None:
        self._engine = engine if engine is not None else db.engine
        self._sample_route = sample_route
        self._lock = threading.Lock()
        self._status = READY_STATUS
        self._is_migrating = False
        self._subscribers: List[StatusCallback] = []

    # ------------------------------------------------------------------
    @property
    def status(self) -> str:
        with self._lock:
            return self._status

    @property
    def is_migrating(self) -> bool:
        with self._lock:
            return self._is_migrating

    def subscribe(self, callback: StatusCallback) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                try:
                    self._subscribers.remove(callback)
                except ValueError:
                    return

        return _unsubscribe

    def set_status(self, status: str) -> None:
        self._update(status=status)

    def _update(self, *, status: Optional[str] = None, migrating: Optional[bool] = None) -> None:
        with self._lock:
            if status is not None:
                self._status = status
            if migrating is not None:
                self._is_migrating = migrating
            snapshot = (self._status, self._is_migrating)
            callbacks = list(self._subscribers)
        for callback in callbacks:
            callback(*snapshot)

    # ------------------------------------------------------------------
    def run_migration(self) -> None:
        """Run the one-time migration. Failures end up in :attr:`status`."""

        self._update(status="Starting migration...", migrating=True)
        try:
            applied = self._applied_version()
            if applied is not None and applied >= MIGRATION_VERSION:
                LOGGER.info("Migration version %s already applied", applied)
                self._update(status=f"Migration already applied (version {applied})")
                return

            for row_type in (TravelRouteRow, TravelStopRow, TravelBookingRow):
                table = row_type.__table__  # type: ignore[attr-defined]
                self._update(status=f"Creating {table.name} table...")
                SQLModel.metadata.create_all(self._engine, tables=[table])
                LOGGER.info("%s table created/verified", table.name)
            SQLModel.metadata.create_all(self._engine, tables=[AppSettingRow.__table__])  # type: ignore[attr-defined]

            with Session(self._engine, expire_on_commit=False) as session:
                self._update(status="Inserting sample route...")
                route_id = self._insert_sample_route(session)
                self._update(status="Inserting sample stops...")
                self._insert_sample_stops(session, route_id)
                session.merge(AppSettingRow(key=MIGRATION_VERSION_KEY, value=str(MIGRATION_VERSION)))
                session.commit()

            self._update(status="Migration completed successfully!")
        except (MigrationError, SQLAlchemyError) as exc:
            LOGGER.exception("Migration failed")
            self._update(status=f"Migration failed: {status_message(exc)}")
        finally:
            self._update(migrating=False)

    def _applied_version(self) -> Optional[int]:
        return settings.get_int_setting(MIGRATION_VERSION_KEY, engine=self._engine)

    def _insert_sample_route(self, session: Session) -> str:
        sample = self._sample_route
        route = TravelRouteRow(
            title=sample.title,
            region=sample.region,
            start_date=sample.start_date,
            end_date=sample.end_date,
            duration_days=sample.duration_days,
            planned_nights=sample.planned_nights,
            flight_cost=sample.flight_cost,
            hotel_cost=sample.hotel_cost,
            total_cost=sample.total_cost,
        )
        session.add(route)
        session.flush()
        if not route.id:
            raise InsertionError("Could not retrieve route ID")
        LOGGER.info("Sample route inserted with ID: %s", route.id)
        return route.id

    def _insert_sample_stops(self, session: Session, route_id: str) -> None:
        for stop in self._sample_route.stops:
            session.add(
                TravelStopRow(
                    route_id=route_id,
                    location=stop.location,
                    country=stop.country,
                    nights=stop.nights,
                    hotel_cost=stop.hotel_cost,
                    notes=stop.notes,
                )
            )
            LOGGER.info("Stop inserted: %s, %s", stop.location, stop.country)
        session.flush()

    # ------------------------------------------------------------------
    def verify_migration(self) -> MigrationSummary:
        """Count migrated rows. Raises :class:`MigrationError` on any problem."""

        self._update(status="Verifying migration...")
        try:
            inspector = inspect(self._engine)
            for row_type in (TravelRouteRow, TravelStopRow, TravelBookingRow):
                name = row_type.__tablename__
                if not inspector.has_table(name):
                    raise VerificationError(f"Table '{name}' is missing")
            with Session(self._engine) as session:
                routes = session.exec(select(func.count()).select_from(TravelRouteRow)).one()
                stops = session.exec(select(func.count()).select_from(TravelStopRow)).one()
                bookings = session.exec(select(func.count()).select_from(TravelBookingRow)).one()
        except SQLAlchemyError as exc:
            raise VerificationError(f"Unable to count migrated rows: {exc}") from exc
        if routes == 0:
            raise VerificationError("No travel routes found; run the migration first")

        summary = MigrationSummary(routes=routes, stops=stops, bookings=bookings)
        LOGGER.info("Migration verification: %s routes, %s stops", routes, stops)
        self._update(status=f"Migration verified: {routes} routes, {stops} stops")
        return summary

    def fetch_all_routes(self) -> List[RouteRecord]:
        statement = select(TravelRouteRow).order_by(
            TravelRouteRow.created_at.desc(),  # type: ignore[attr-defined]
            TravelRouteRow.title,
        )
        try:
            with Session(self._engine) as session:
                rows = session.exec(statement).all()
                return [RouteRecord.model_validate(row) for row in rows]
        except SQLAlchemyError as exc:
            raise QueryError(f"Could not fetch routes: {exc}") from exc
        except ValidationError as exc:
            raise QueryError(f"Malformed route row: {exc}") from exc

    def fetch_stops_for_route(self, route_id: str) -> List[StopRecord]:
        statement = (
            select(TravelStopRow)
            .where(TravelStopRow.route_id == route_id)
            .order_by(TravelStopRow.nights, TravelStopRow.location)  # type: ignore[arg-type]
        )
        try:
            with Session(self._engine) as session:
                rows = session.exec(statement).all()
                return [StopRecord.model_validate(row) for row in rows]
        except SQLAlchemyError as exc:
            raise QueryError(f"Could not fetch stops: {exc}") from exc
        except ValidationError as exc:
            raise QueryError(f"Malformed stop row: {exc}") from exc
