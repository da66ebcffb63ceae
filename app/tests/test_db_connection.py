import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import QueuePool

from app.config import settings
from app.database import check_db_connection, engine as app_engine
from app.main import run_startup_checks
from app.services.upload_service import UploadStore


def broken_engine(tmp_path):
    return create_engine(f"sqlite:///{tmp_path / 'missing-dir' / 'db.sqlite'}")


def test_database_connection_success(engine):
    assert check_db_connection(engine) is True


def test_database_connection_failure(tmp_path):
    assert check_db_connection(broken_engine(tmp_path)) is False


def test_startup_creates_upload_directory(engine, tmp_path):
    store = UploadStore(tmp_path / "uploads" / "vehicles", "/uploads/vehicles")
    run_startup_checks(store, engine)
    assert store.directory.is_dir()


def test_startup_aborts_without_database(tmp_path):
    store = UploadStore(tmp_path / "uploads", "/uploads/vehicles")
    with pytest.raises(RuntimeError, match="Database"):
        run_startup_checks(store, broken_engine(tmp_path))


def test_health_endpoint(client, upload_store):
    upload_store.ensure_directory()
    resp = client.get("/api/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["uploadDirWritable"] is True


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/api/v1/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["success"] is False
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_wrong_method_uses_error_envelope(client):
    resp = client.put("/api/health")
    assert resp.status_code == 405
    assert resp.json()["error"]["code"] == "METHOD_NOT_ALLOWED"


def test_app_pool_has_no_checkout_timeout():
    assert app_engine.pool.timeout() is None


def test_pool_checkout_waits_for_a_returned_connection(tmp_path):
    pool_engine = create_engine(
        f"sqlite:///{tmp_path / 'pool.db'}",
        poolclass=QueuePool,
        pool_size=1,
        max_overflow=0,
        pool_timeout=settings.DATABASE_POOL_TIMEOUT,
        connect_args={"check_same_thread": False},
    )
    held = pool_engine.connect()
    acquired = threading.Event()

    def checkout():
        with pool_engine.connect():
            acquired.set()

    worker = threading.Thread(target=checkout, daemon=True)
    worker.start()
    try:
        assert not acquired.wait(0.5)
    finally:
        held.close()

    assert acquired.wait(5)
    worker.join(5)
    pool_engine.dispose()
