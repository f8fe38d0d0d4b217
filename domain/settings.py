from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

import domain.db as db

LOGGER = logging.getLogger("domain.settings")


def _bind(engine: Engine | None) -> Engine:
    # Resolved per call so a rebound ``db.engine`` is picked up.
    return engine if engine is not None else db.engine


def get_setting(key: str, *, engine: Engine | None = None) -> Optional[str]:
    """Return the stored value for *key*, or ``None`` when unset or unreadable.

    A database without the ``app_settings`` table reads as empty.
    """

    bind = _bind(engine)
    try:
        if not inspect(bind).has_table(db.AppSettingRow.__tablename__):
            return None
        with Session(bind) as session:
            row = session.get(db.AppSettingRow, key)
            return row.value if row else None
    except SQLAlchemyError as exc:
        LOGGER.warning("Unable to read app setting '%s': %s", key, exc)
        return None


def get_int_setting(key: str, *, engine: Engine | None = None) -> Optional[int]:
    raw = get_setting(key, engine=engine)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        LOGGER.warning("Ignoring non-integer app setting '%s'=%r", key, raw)
        return None


def set_setting(key: str, value: str, *, engine: Engine | None = None) -> bool:
    """Upsert *value* under *key*. Returns ``False`` if the write failed."""

    try:
        with Session(_bind(engine)) as session:
            session.merge(db.AppSettingRow(key=key, value=value))
            session.commit()
        return True
    except SQLAlchemyError as exc:
        LOGGER.warning("Unable to write app setting '%s': %s", key, exc)
        return False
