from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shutterquote.db import models  # noqa: F401  (registers tables)
from shutterquote.db.base import Base
from shutterquote.db.crud.prices import PriceCatalog
from shutterquote.db.session import get_db
from shutterquote.main import app



@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    seed = factory()
    PriceCatalog(seed).seed()
    seed.close()
    yield factory
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def quotation_record() -> dict:
    """A consistent 100x100 cm plastic shutter with a 10% discount and two extras."""
    return {
        "customer_name": "Jane Roe",
        "customer_email": "jane@example.com",
        "customer_phone": "+33 1 23 45 67 89",
        "customer_address": "12 Rue des Volets, Lyon",
        "product_type": "plastic",
        "width": Decimal("100"),
        "height": Decimal("100"),
        "quantity": 1,
        "area": Decimal("1.00"),
        "price_per_sqm": Decimal("45.00"),
        "net_price": Decimal("45.00"),
        "vat_percentage": Decimal("20"),
        "vat_amount": Decimal("8.10"),
        "gross_price": Decimal("40.50"),
        "discount_type": "percentage",
        "discount_value": Decimal("10"),
        "discount_amount": Decimal("4.50"),
        "additional_costs": [
            {"label": "Delivery", "amount": "20"},
            {"label": "Installation", "amount": "30"},
        ],
        "additional_costs_total": Decimal("50.00"),
        "final_total": Decimal("98.60"),
        "notes": "Motorised, white finish",
        "created_by": None,
    }
