from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import domain.db as db
from domain.migration import MigrationError, MigrationManager

LOGGER = logging.getLogger("scripts.run_migration")

DEFAULT_DATABASE = Path("pathfinder.db")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the PathFinder travel routes migration without the GUI.")
    parser.add_argument(
        "--database",
        type=Path,
        default=DEFAULT_DATABASE,
        help="SQLite database file to migrate",
    )
    parser.add_argument("--verify", action="store_true", help="Verify row counts after migrating")
    parser.add_argument("--query", action="store_true", help="Print the migrated routes and stops")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log verbosity",
    )
    return parser.parse_args(argv)


def run(database: Path, *, verify: bool = False, query: bool = False) -> int:
    db.configure_engine(f"sqlite:///{database}")
    manager = MigrationManager()
    manager.subscribe(lambda status, _busy: LOGGER.info("%s", status))

    manager.run_migration()
    if manager.status.startswith("Migration failed"):
        return 1
    try:
        if verify:
            summary = manager.verify_migration()
            print(f"{summary.routes} routes, {summary.stops} stops, {summary.bookings} bookings")
        if query:
            routes = manager.fetch_all_routes()
            print(f"Found {len(routes)} routes:")
            for route in routes:
                print(f"  {route.describe()}")
                for stop in manager.fetch_stops_for_route(route.id):
                    print(f"    {stop.describe()}")
    except MigrationError as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level, format="[%(levelname)s] %(message)s")
    sys.exit(run(args.database, verify=args.verify, query=args.query))


if __name__ == "__main__":
    main()
