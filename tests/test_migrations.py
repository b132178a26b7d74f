"""Tests that the Alembic revisions build the schema the models expect."""

from alembic import command
from sqlalchemy import create_engine, inspect

from clinic.db.migrations import ALEMBIC_DIR, get_alembic_config


def test_alembic_config_uses_sync_driver() -> None:
    config = get_alembic_config()

    assert config.get_main_option("script_location") == str(ALEMBIC_DIR)
    assert "aiosqlite" not in config.get_main_option("sqlalchemy.url")


def test_upgrade_to_head_creates_tables(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'clinic.db'}"
    config = get_alembic_config()
    config.set_main_option("sqlalchemy.url", url)

    command.upgrade(config, "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        assert {"users", "patients", "doctors", "appointments", "alembic_version"} <= tables

        index_names = {ix["name"] for ix in inspector.get_indexes("appointments")}
        assert {"uq_appointments_doctor_slot", "uq_appointments_patient_day"} <= index_names

        patient_columns = {c["name"] for c in inspector.get_columns("patients")}
        assert {"document", "active", "address_postal_code", "address_state"} <= patient_columns
    finally:
        engine.dispose()

    # Re-running is a no-op
    command.upgrade(config, "head")
