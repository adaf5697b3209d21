import os

# baza testowa zanim cokolwiek z storefront zaimportuje settings
os.environ["DATABASE_URL"] = "sqlite://"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.data.database import Base, get_db
from storefront.data.models import AddressModel, ColorVariantModel, ProductModel, StoreModel
from storefront.domain.shipping import City
from storefront.main import create_app

SESSION = "sess-test-001"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def catalog(db):
    """Dwa sklepy: P1 (red 5, blue 0) i P2 (green 10) w roznych sklepach."""
    store_a = StoreModel(store_id="store-a", store_name="Nile Kitchen")
    store_b = StoreModel(store_id="store-b", store_name="Delta Bath")
    db.add_all([store_a, store_b])

    p1 = ProductModel(product_id="P1", store_id="store-a", product_name="Ceramic Mug", price=Decimal("100.00"))
    p1.variants = [
        ColorVariantModel(color="red", inventory=5, image_urls=["https://img.example/p1-red.jpg"]),
        ColorVariantModel(color="blue", inventory=0, image_urls=[]),
    ]
    p1.total_inventory = 5

    p2 = ProductModel(product_id="P2", store_id="store-b", product_name="Cotton Towel", price=Decimal("50.00"))
    p2.variants = [ColorVariantModel(color="green", inventory=10, image_urls=[])]
    p2.total_inventory = 10

    db.add_all([p1, p2])
    db.commit()
    return {"P1": p1, "P2": p2}


@pytest.fixture
def set_stock(db):
    def _set(product_id: str, color: str, inventory: int):
        variant = (
            db.query(ColorVariantModel)
            .filter(ColorVariantModel.product_id == product_id, ColorVariantModel.color == color)
            .one()
        )
        variant.inventory = inventory
        db.commit()

    return _set


@pytest.fixture
def stock_of(db):
    def _stock(product_id: str, color: str) -> int:
        db.expire_all()
        return (
            db.query(ColorVariantModel)
            .filter(ColorVariantModel.product_id == product_id, ColorVariantModel.color == color)
            .one()
            .inventory
        )

    return _stock


@pytest.fixture
def make_address(db):
    def _make(session_id: str = SESSION, city: City = City.CAIRO) -> AddressModel:
        address = AddressModel(
            session_id=session_id,
            name="Mona Hassan",
            email="mona@example.com",
            phone="01000000000",
            address="12 Tahrir St",
            building_number=12,
            floor_number=3,
            flat_number=7,
            city=city,
            district="Downtown",
            country="Egypt",
        )
        db.add(address)
        db.commit()
        return address

    return _make


class RecordingFollowUp:
    def __init__(self):
        self.debits = []
        self.clears = []

    def retry_inventory_debit(self, order_id):
        self.debits.append(order_id)

    def retry_cart_clear(self, order_id):
        self.clears.append(order_id)


@pytest.fixture
def followup():
    return RecordingFollowUp()


@pytest.fixture
def client(session_factory, catalog, monkeypatch):
    from storefront.services import followup_service

    sent = []
    monkeypatch.setattr(followup_service.celery_app, "send_task", lambda name, args=None, **kw: sent.append((name, args)))

    app = create_app(with_lifespan=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)
    test_client.sent_tasks = sent
    return test_client
