import os
from decimal import Decimal

#before any agrimart import, settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "agrimart-test-secret-0123456789abcdef")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from agrimart.api.deps import get_notifier, get_quote_store
from agrimart.api.security import create_access_token
from agrimart.data.database import get_db, init_db, make_engine
from agrimart.data.models import AddressModel, ProductModel, UserModel
from agrimart.domain.enums import ProductStatus, UserRole
from agrimart.main import app


def pytest_collection_modifyitems(config, items):
    """Mark tests by module: pure domain tests vs. everything that needs a database."""
    for item in items:
        name = item.path.name
        if name in ("test_availability.py", "test_enums.py"):
            item.add_marker(pytest.mark.domain)
        else:
            item.add_marker(pytest.mark.integration)


class FakeNotifier:
    def __init__(self):
        self.sent = []

    def send_order_placed(self, user_id: int, order_id: int) -> None:
        self.sent.append((user_id, order_id))


class FakeQuoteStore:
    """Set semantics of the redis quote store, kept in a dict."""

    def __init__(self):
        self.quotes = {}

    def remember(self, user_id, destination_village_code, weight, prices):
        key = (user_id, destination_village_code, int(weight))
        self.quotes.setdefault(key, set()).update(Decimal(str(p)) for p in prices)

    def is_quoted(self, user_id, destination_village_code, weight, price):
        key = (user_id, destination_village_code, int(weight))
        return Decimal(str(price)) in self.quotes.get(key, set())


@pytest.fixture()
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'agrimart.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def notifier():
    return FakeNotifier()


@pytest.fixture()
def client(session_factory, notifier):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_quote_store] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db):
    def _make(name="Budi", role=UserRole.BUYER):
        user = UserModel(name=name, role=role)
        db.add(user)
        db.commit()
        return user.id

    return _make


@pytest.fixture()
def seller_id(make_user):
    return make_user("Tani Makmur", UserRole.SELLER)


@pytest.fixture()
def buyer_id(make_user):
    return make_user("Budi", UserRole.BUYER)


@pytest.fixture()
def make_product(db, seller_id):
    def _make(
        price="1000.00",
        stock=10,
        min_order=1,
        status=ProductStatus.READY_STOCK,
        weight=500,
        name="Beras",
        **extra,
    ):
        product = ProductModel(
            seller_id=extra.pop("seller_id", seller_id),
            name=name,
            price=Decimal(price),
            unit="kg",
            stock=stock,
            min_order=min_order,
            status=status,
            weight=weight,
            origin_village_code=extra.pop("origin_village_code", "3273010001"),
            **extra,
        )
        db.add(product)
        db.commit()
        return product.id

    return _make


@pytest.fixture()
def make_address(db):
    def _make(user_id, detail="Jl. Sawah No. 1"):
        address = AddressModel(
            user_id=user_id,
            detail=detail,
            city_id="3273",
            district_id="327301",
            village_code="3273010001",
            province="Jawa Barat",
            zip_code="40111",
        )
        db.add(address)
        db.commit()
        return address.id

    return _make


def auth(user_id: int, role=UserRole.BUYER) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}


@pytest.fixture()
def auth_headers():
    return auth


@pytest.fixture()
def quote_store():
    return FakeQuoteStore()
