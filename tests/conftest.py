# tests/conftest.py
import os

os.environ.setdefault("MPLBACKEND", "Agg")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import infra.db.models  # noqa: F401
from infra.db.base import Base
from infra.services import build_service_graph
from tests.factories import FIXED_NOW


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def services(session):
    return build_service_graph(session, clock=lambda: FIXED_NOW).as_dict()
