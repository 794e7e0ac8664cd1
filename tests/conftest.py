"""
Shared fixtures: a controllable clock, fresh stores per test and an API
client bound to a fresh app.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.db.database import init_db, make_engine
from app.main import create_app
from app.storage import MemStorage
from app.storage.seed import seed_demo_users
from app.storage.sql import SqlStorage


class FakeClock:
    def __init__(self, start=datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sql_engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def storage(request, clock):
    """Every store-level test runs against both backends."""
    if request.param == "sql":
        return SqlStorage(request.getfixturevalue("sql_engine"), clock=clock)
    return MemStorage(clock=clock)


@pytest.fixture
def mem_storage(clock):
    return MemStorage(clock=clock)


@pytest.fixture
def client(mem_storage):
    return TestClient(create_app(mem_storage))


@pytest.fixture
def seeded_client(mem_storage):
    seed_demo_users(mem_storage)
    return TestClient(create_app(mem_storage))


def entry_payload(**overrides):
    payload = {
        "userId": 1,
        "operatorId": "12275",
        "process": "Buffing",
        "station": "2",
        "time": "8am",
    }
    payload.update(overrides)
    return payload


def instruction_payload(**overrides):
    payload = {
        "userId": 2,
        "type": "Quality check",
        "targetProcess": "Painting",
        "targetStation": "All Stations",
        "details": "Check paint thickness",
    }
    payload.update(overrides)
    return payload
