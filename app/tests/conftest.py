"""
Shared fixtures for the API test suite.

- In-memory SQLite database (StaticPool, foreign keys on) per test
- FastAPI TestClient with get_db / get_upload_store overridden
- Upload directory under pytest's tmp_path
- An admin account plus ready-made Authorization headers
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("APP_ENV", "test")

import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.dependencies import get_upload_store
from app.main import app as fastapi_app
from app.models import AdminUser
from app.services.upload_service import UploadStore
from app.utils.security import hash_password

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "Sup3rSecret!"

# Smallest valid-looking payloads; content is never decoded as an image.
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def upload_dir(tmp_path):
    return tmp_path / "uploads" / "vehicles"


@pytest.fixture()
def upload_store(upload_dir):
    return UploadStore(upload_dir, "/uploads/vehicles", max_size=5 * 1024 * 1024, max_files=10)


@pytest.fixture()
def client(session_factory, upload_store):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_upload_store] = lambda: upload_store
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def admin(session_factory):
    with session_factory() as db:
        admin = AdminUser(username=ADMIN_USERNAME, password=hash_password(ADMIN_PASSWORD), isActive=True)
        db.add(admin)
        db.commit()
        db.refresh(admin)
        return admin


@pytest.fixture()
def auth_headers(client, admin):
    resp = client.post("/api/v1/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['data']['accessToken']}"}


@pytest.fixture()
def count_rows(session_factory):
    """count_rows(Model) -> number of rows, read through a fresh session."""
    def _count(model) -> int:
        with session_factory() as db:
            return db.execute(select(func.count()).select_from(model)).scalar_one()
    return _count


# ─── Request builders ─────────────────────────────────────────────────────────
def vehicle_form(**overrides) -> dict:
    data = {
        "brand": "BMW",
        "model": "320d Touring",
        "year": "2019",
        "price": "24990.00",
        "mileage": "45000",
        "fuelType": "Diesel",
        "transmission": "Automatic",
        "power": "140 kW",
        "description": "Full service history",
    }
    data.update(overrides)
    return data


def features_field(labels) -> str:
    return json.dumps(labels)


def image_part(name="front.jpg", content=JPEG_BYTES, content_type="image/jpeg"):
    return ("images", (name, content, content_type))
