from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.domain.schemas import OrderCreate
from app.infrastructure.database import build_engine, build_session_factory, init_database
from app.infrastructure.repositories.memory_repository import InMemoryOrderRepository
from app.infrastructure.repositories.order_repository import SqlOrderRepository
from app.main import create_app


class TickingClock:
    """Returns a strictly increasing UTC timestamp, `step` apart, on every call."""

    def __init__(self, start=datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc), step=timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self):
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def make_order():
    def _make(name="Alice Smith", phone="1234567890", medicine="Aspirin 500mg x2") -> OrderCreate:
        return OrderCreate(customer_name=name, phone=phone, medicine=medicine)
    return _make


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def memory_repo(clock):
    return InMemoryOrderRepository(clock=clock)


@pytest.fixture
def sql_repo(clock):
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_database(engine, max_retries=1, wait_seconds=0)
    yield SqlOrderRepository(build_session_factory(engine), clock=clock)
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def repo(request):
    """Runs a test against every IOrderRepository implementation."""
    return request.getfixturevalue(f"{request.param}_repo")


@pytest.fixture
def client(memory_repo):
    app = create_app(Settings(STORAGE_BACKEND="memory"), order_repo=memory_repo)
    with TestClient(app) as test_client:
        yield test_client
