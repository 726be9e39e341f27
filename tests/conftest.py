import os

# Must be in place before banner_service.db.session is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["ENV"] = "test"

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from banner_service.core.security import create_access_token
from banner_service.db.init_db import create_tables
from banner_service.db.session import get_db
from banner_service.main import app
from banner_service.models.banner import Banner, BannerType, LinkType
from banner_service.models.base import Base

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_banner(**overrides) -> Banner:
    fields = dict(
        title="Banner",
        image_url="https://cdn.example.com/b.jpg",
        link_type=LinkType.NONE,
        link_url=None,
        is_enabled=True,
        is_fixed=False,
        start_date=NOW - timedelta(days=1),
        end_date=NOW + timedelta(days=1),
        display_order=0,
        priority=1,
        banner_type=BannerType.NEWS,
    )
    fields.update(overrides)
    if fields["is_fixed"]:
        fields["start_date"] = overrides.get("start_date")
        fields["end_date"] = overrides.get("end_date")
    return Banner(**fields)


@pytest.fixture
def banner_factory():
    """Transient banners with every column populated; fixed ones default to no dates."""
    return make_banner


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield eng
    eng.dispose()


@pytest.fixture
def db_session(engine):
    create_tables(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


def _override(session_factory):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()
    return _get_db


@pytest.fixture
def client(engine, db_session):
    app.dependency_overrides[get_db] = _override(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def bare_client(engine):
    """Client whose database has no banners table."""
    app.dependency_overrides[get_db] = _override(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = create_access_token("admin@example.com", roles=["admin"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def now():
    return NOW
