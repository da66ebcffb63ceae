from pathlib import Path

import pytest
from alembic import command
from alembic.autogenerate import compare_metadata
from alembic.config import Config
from alembic.migration import MigrationContext
from sqlalchemy import create_engine, func, inspect, select

from app.database import Base
from app.models import Inquiry, Vehicle, VehicleFeature, VehicleImage

ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture()
def migrated_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    cfg.set_main_option("sqlalchemy.url", url)
    cfg.attributes["configure_logger"] = False

    command.upgrade(cfg, "head")
    yield url
    command.downgrade(cfg, "base")


def test_upgrade_creates_every_table(migrated_url):
    eng = create_engine(migrated_url)
    tables = set(inspect(eng).get_table_names())
    eng.dispose()
    assert set(Base.metadata.tables) <= tables


def test_migrated_schema_matches_models(migrated_url):
    eng = create_engine(migrated_url)
    with eng.connect() as conn:
        diff = compare_metadata(MigrationContext.configure(conn, opts={"compare_type": True}), Base.metadata)
    eng.dispose()
    assert diff == []


def test_deleting_vehicle_cascades_in_migrated_schema(migrated_url):
    eng = create_engine(migrated_url)
    with eng.begin() as conn:
        vid = conn.execute(
            Vehicle.__table__.insert().values(
                brand="Audi", model="A4", year=2018, price=19990, mileage=80000,
                fuelType="Petrol", transmission="Manual", power="110 kW",
            )
        ).inserted_primary_key[0]
        conn.execute(VehicleFeature.__table__.insert(), [
            {"vehicleId": vid, "feature": "ABS"}, {"vehicleId": vid, "feature": "ESP"},
        ])
        conn.execute(VehicleImage.__table__.insert(), [
            {"vehicleId": vid, "imagePath": "/uploads/vehicles/a.jpg", "sortOrder": 0},
        ])
        conn.execute(Inquiry.__table__.insert().values(
            vehicleId=vid, customerName="Jane Doe", email="jane@example.com",
        ))

    with eng.begin() as conn:
        conn.execute(Vehicle.__table__.delete().where(Vehicle.__table__.c.id == vid))

    with eng.connect() as conn:
        for model in (Vehicle, VehicleFeature, VehicleImage, Inquiry):
            assert conn.execute(select(func.count()).select_from(model)).scalar_one() == 0
    eng.dispose()
