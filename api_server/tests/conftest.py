from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from incoming_goods.core.config import Settings
from incoming_goods.db.database import create_db_engine, create_session_factory, create_tables
from incoming_goods.main import create_application
from incoming_goods.repositories.order_repository import SqlAlchemyOrderRepository
from incoming_goods.services.order_service import OrderLifecycleService
from incoming_goods.services.photo_service import PhotoIngestionService
from incoming_goods.storage.blob_store import LocalBlobStore

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 128


class FakeClock:
    """호출할 때마다 1분씩 증가하는 시계"""

    def __init__(self, start=datetime(2024, 5, 1, 9, 0, 0)):
        self.current = start

    def __call__(self):
        self.current += timedelta(minutes=1)
        return self.current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session_factory():
    engine = create_db_engine("sqlite://")
    create_tables(engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture
def repository(session_factory):
    return SqlAlchemyOrderRepository(session_factory)


@pytest.fixture
def order_service(repository, clock):
    return OrderLifecycleService(repository, clock=clock)


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def blob_store(upload_dir):
    return LocalBlobStore(str(upload_dir))


@pytest.fixture
def photo_service(order_service, blob_store, clock):
    return PhotoIngestionService(order_service, blob_store, clock=clock)


@pytest.fixture
def pending_order(order_service):
    return order_service.create_order("123456789", "Office Supplies - Box of Pens", "Office Depot")


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL="sqlite://",
        UPLOAD_DIR=str(tmp_path / "api-uploads"),
        SEED_SAMPLE_DATA=True,
        LOG_JSON=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def client(settings):
    app = create_application(settings)
    with TestClient(app) as test_client:
        yield test_client


def stored_files(root):
    """저장소 루트 아래 실제 파일 목록 (임시 파일 제외)"""
    if not root.exists():
        return []
    return sorted(p for p in root.rglob("*") if p.is_file())
