import os

# app.db builds its engine at import time
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models
from app.db import Base, get_db
from app.main import app

UNREACHABLE_URL = "sqlite:////nonexistent-dir/unreachable.db"


def _override(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    return override_get_db


@pytest.fixture
def test_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def unreachable_engine():
    engine = create_engine(UNREACHABLE_URL)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def client(session_factory):
    app.dependency_overrides[get_db] = _override(session_factory)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def unreachable_client(unreachable_engine):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=unreachable_engine)
    app.dependency_overrides[get_db] = _override(factory)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def row_count(session_factory):
    def count() -> int:
        with session_factory() as db:
            return db.scalar(select(func.count()).select_from(models.Example))

    return count
