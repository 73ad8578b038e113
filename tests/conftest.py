"""
Shared fixtures: in-memory SQLite, seeded catalog and users, API client.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.database import get_session
from app.main import app
from app.models.product import Product
from app.models.user import User
from app.schemas.user_schemas import CurrentUser
from app.services.cart_store import CartStore
from app.services.fulfillment_tracker import FulfillmentTracker
from app.services.storage import MemoryStorage
from app.utils.token import create_access_token


class EventRecorder:
    """Stands in for the notification dispatcher."""

    def __init__(self):
        self.events = []

    def __call__(self, event, *, extra=None, **kwargs):
        self.events.append((event, extra or {}))
        return None

    @property
    def names(self):
        return [event.value for event, _ in self.events]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def events():
    return EventRecorder()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def cart(storage, events):
    return CartStore(storage, notify=events)


@pytest.fixture
def customer():
    return CurrentUser(id=7, username="ravi", email="ravi@example.com")


@pytest.fixture
def seeded(session):
    """Two users and a small catalog; returns the ids used by the tests."""
    customer = User(username="ravi", email="ravi@example.com")
    other = User(username="meena", email="meena@example.com")
    admin = User(username="admin", email="admin@agrimart.in", role="admin")
    session.add_all([customer, other, admin])

    session.add_all([
        Product(id="1", name="Mahindra 575 DI Tractor", price=385000,
                image="/img/575di.jpg", colors=["red", "blue"], category="tractors", stock=4),
        Product(id="3", name="Rotavator 42 Blade", price=75000,
                image="/img/rotavator.jpg", colors=["green", "orange"], category="tillers", stock=9),
        Product(id="5", name="Knapsack Sprayer 16L", price=5000,
                image="/img/sprayer.jpg", colors=[], category="sprayers", stock=30),
    ])
    session.commit()

    return {"customer": customer.id, "other": other.id, "admin": admin.id}


@pytest.fixture
def auth_headers():
    def build(user_id: int) -> dict:
        token = create_access_token({"sub": str(user_id)})
        return {"Authorization": f"Bearer {token}"}
    return build


@pytest.fixture
def client(engine, seeded):
    def override_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = override_session
    app.state.fulfillment_tracker = FulfillmentTracker()

    yield TestClient(app)

    app.dependency_overrides.clear()
