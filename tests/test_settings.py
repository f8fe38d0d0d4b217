from sqlmodel import SQLModel, create_engine

import domain.db as db
from domain import settings


def test_missing_table_reads_as_unset(tmp_path) -> None:
    engine = create_engine(f"sqlite:///{tmp_path / 'empty.db'}")

    assert settings.get_setting("isDarkMode", engine=engine) is None
    assert settings.get_int_setting("migration.travel_routes.version", engine=engine) is None


def test_values_round_trip_through_configured_engine(tmp_path, monkeypatch) -> None:
    engine = create_engine(f"sqlite:///{tmp_path / 'settings.db'}")
    monkeypatch.setattr(db, "engine", engine)
    db.create_all([db.AppSettingRow.__table__])

    assert settings.set_setting("isDarkMode", "true") is True
    assert settings.set_setting("isDarkMode", "false") is True
    assert settings.get_setting("isDarkMode") == "false"
    assert settings.get_setting("isDarkMode", engine=engine) == "false"


def test_int_setting_ignores_malformed_values(tmp_path) -> None:
    engine = create_engine(f"sqlite:///{tmp_path / 'ints.db'}")
    SQLModel.metadata.create_all(engine, tables=[db.AppSettingRow.__table__])

    settings.set_setting("migration.travel_routes.version", "one", engine=engine)
    assert settings.get_int_setting("migration.travel_routes.version", engine=engine) is None

    settings.set_setting("migration.travel_routes.version", "2", engine=engine)
    assert settings.get_int_setting("migration.travel_routes.version", engine=engine) == 2
