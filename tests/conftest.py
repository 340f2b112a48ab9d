"""Shared fixtures for the invoice dashboard tests.

Provides an in-memory SQLite store, a session bound to it, a fresh view
cache, a scripted identity provider and a FastAPI TestClient with all
three injected.
"""

import os

# Point the module-level engine at an in-memory store before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.dependencies import get_db, get_identity_provider, get_view_cache
from backend.main import create_app
from backend.services.view_cache import ViewCache
from database.models import Base
from database.models.customers import Customer
from database.models.invoice import Invoice
from database.setup_db import create_db_engine


class FakeIdentityProvider:
    """Records sign-in calls; raises ``error`` when one is set."""

    def __init__(self, error=None, redirect_to=None):
        self.error = error
        self.redirect_to = redirect_to
        self.calls = []

    def sign_in(self, provider, credentials, redirect_to):
        self.calls.append((provider, dict(credentials), redirect_to))
        if self.error is not None:
            raise self.error
        return self.redirect_to or redirect_to


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine():
    engine = create_db_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(bind=engine)()
    yield session
    session.close()


@pytest.fixture()
def customer(db) -> Customer:
    customer = Customer(name="Evil Rabbit", email="evil@rabbit.com", image_url="/customers/evil-rabbit.png")
    db.add(customer)
    db.commit()
    return customer


@pytest.fixture()
def invoice(db, customer) -> Invoice:
    invoice = Invoice(customer_id=customer.id, amount=15795, status="pending", date=date(2024, 12, 6))
    db.add(invoice)
    db.commit()
    return invoice


@pytest.fixture()
def cache() -> ViewCache:
    return ViewCache()


@pytest.fixture()
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider()


# ---------------------------------------------------------------------------
# FastAPI TestClient
# ---------------------------------------------------------------------------


@pytest.fixture()
def app(db, cache, identity):
    application = create_app(create_tables=False)

    def _override_db():
        yield db

    application.dependency_overrides[get_db] = _override_db
    application.dependency_overrides[get_view_cache] = lambda: cache
    application.dependency_overrides[get_identity_provider] = lambda: identity
    return application


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client
