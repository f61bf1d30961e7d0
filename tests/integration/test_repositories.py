from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from shutterquote.core.errors import Forbidden, NotFound, StorageUnavailable, ValidationError
from shutterquote.core.security import Principal
from shutterquote.db.crud.prices import PriceCatalog
from shutterquote.db.crud.quotations import QuotationStore
from shutterquote.pricing.calculator import QuotationInput, calculate

ADMIN = Principal(name="admin", role="admin")
USER = Principal(name="user", role="user")
FIXED_NS = 1_760_000_000_000 * 1_000_000


def test_seeded_catalog(db):
    entries = {p.product_type: p.price_per_sqm for p in PriceCatalog(db).get_all()}
    assert entries == {"plastic": Decimal("45.00"), "aluminium": Decimal("85.00")}
    assert PriceCatalog(db).get_by_type("wood") is None


def test_seed_does_not_overwrite_existing_prices(db):
    catalog = PriceCatalog(db)
    catalog.update("plastic", "47.50", ADMIN)
    created = catalog.seed([{"product_type": "plastic", "price_per_sqm": "45.00"}, {"product_type": "steel", "price_per_sqm": "120"}])
    assert created == 1
    assert catalog.get_by_type("plastic").price_per_sqm == Decimal("47.50")
    assert catalog.get_by_type("steel").price_per_sqm == Decimal("120")


def test_admin_can_update_price(db, session_factory):
    entry = PriceCatalog(db).update("plastic", "50.00", ADMIN)
    assert entry.price_per_sqm == Decimal("50.00")
    assert entry.updated_at is not None

    fresh = session_factory()
    assert PriceCatalog(fresh).get_by_type("plastic").price_per_sqm == Decimal("50.00")
    fresh.close()


@pytest.mark.parametrize("principal", [None, USER])
def test_non_admin_update_is_forbidden_and_catalog_unchanged(db, session_factory, principal):
    with pytest.raises(Forbidden):
        PriceCatalog(db).update("plastic", "1.00", principal)
    fresh = session_factory()
    assert PriceCatalog(fresh).get_by_type("plastic").price_per_sqm == Decimal("45.00")
    fresh.close()


def test_update_unknown_product_type_is_not_found(db):
    with pytest.raises(NotFound):
        PriceCatalog(db).update("titanium", "10", ADMIN)
    assert PriceCatalog(db).get_by_type("titanium") is None


@pytest.mark.parametrize("value", ["abc", "-1", "NaN", ""])
def test_update_rejects_bad_prices(db, value):
    with pytest.raises(ValidationError):
        PriceCatalog(db).update("plastic", value, ADMIN)


def test_create_then_read_back_identical_record(db, session_factory, quotation_record):
    number = QuotationStore(db, clock=lambda: FIXED_NS).create(quotation_record)
    assert number == "QT-1760000000000"

    fresh = session_factory()
    stored = QuotationStore(fresh).get_by_number(number)
    for field, value in quotation_record.items():
        assert getattr(stored, field) == value, field
    assert stored.quotation_number == number
    assert QuotationStore(fresh).get_by_id(stored.id).quotation_number == number
    fresh.close()


def test_decimal_strings_round_trip_exactly(db, session_factory, quotation_record):
    quotation_record["area"] = Decimal("0.110889")
    number = QuotationStore(db).create(quotation_record)
    fresh = session_factory()
    assert str(QuotationStore(fresh).get_by_number(number).area) == "0.110889"
    fresh.close()


def test_float_figures_are_stored_as_their_decimal_text(db, session_factory, quotation_record):
    quotation_record.update(width=100.1, height=33.3, final_total=98.6)
    number = QuotationStore(db).create(quotation_record)
    fresh = session_factory()
    stored = QuotationStore(fresh).get_by_number(number)
    assert stored.width == Decimal("100.1")
    assert stored.height == Decimal("33.3")
    assert stored.final_total == Decimal("98.6")
    fresh.close()


def test_store_does_not_recompute_submitted_figures(db, quotation_record):
    quotation_record["final_total"] = Decimal("1.00")
    number = QuotationStore(db).create(quotation_record)
    assert QuotationStore(db).get_by_number(number).final_total == Decimal("1.00")


def test_colliding_numbers_are_retried(db, quotation_record):
    store = QuotationStore(db, clock=lambda: FIXED_NS)
    first = store.create(quotation_record)
    second = store.create(dict(quotation_record, customer_name="Second"))
    assert first == "QT-1760000000000"
    assert second == "QT-1760000000001"
    assert store.get_by_number(second).customer_name == "Second"


def test_unknown_fields_are_rejected(db, quotation_record):
    with pytest.raises(ValidationError):
        QuotationStore(db).create(dict(quotation_record, quotation_number="QT-1"))


def test_unknown_discount_type_is_rejected(db, quotation_record):
    with pytest.raises(ValidationError):
        QuotationStore(db).create(dict(quotation_record, discount_type="coupon"))
    assert QuotationStore(db).list_all() == []


def test_missing_required_field_is_a_validation_error(db, quotation_record):
    del quotation_record["customer_name"]
    with pytest.raises(ValidationError):
        QuotationStore(db).create(quotation_record)


def test_list_all_is_oldest_first(db, quotation_record):
    store = QuotationStore(db)
    numbers = [store.create(dict(quotation_record, customer_name=f"Customer {i}")) for i in range(3)]
    listed = store.list_all()
    assert [q.customer_name for q in listed] == ["Customer 0", "Customer 1", "Customer 2"]
    assert len(set(numbers)) == 3


def test_missing_records_are_absent(db):
    store = QuotationStore(db)
    assert store.get_by_number("QT-0") is None
    assert store.get_by_id(12345) is None
    assert store.list_all() == []


@pytest.fixture()
def unreachable_db(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'nowhere.db'}")
    session = sessionmaker(bind=engine)()
    yield session
    session.close()
    engine.dispose()


def test_reads_degrade_to_empty_when_storage_is_down(unreachable_db):
    assert PriceCatalog(unreachable_db).get_all() == []
    assert PriceCatalog(unreachable_db).get_by_type("plastic") is None
    assert QuotationStore(unreachable_db).list_all() == []
    assert QuotationStore(unreachable_db).get_by_number("QT-1") is None


def test_writes_fail_loudly_when_storage_is_down(unreachable_db, quotation_record):
    with pytest.raises(StorageUnavailable):
        QuotationStore(unreachable_db).create(quotation_record)
    with pytest.raises(StorageUnavailable):
        PriceCatalog(unreachable_db).update("plastic", "50", ADMIN)


def test_pricing_during_outage_is_unavailable_not_missing(unreachable_db):
    data = QuotationInput(
        product_type="plastic", width=Decimal("100"), height=Decimal("100"), quantity=1, vat_percentage=Decimal("20")
    )
    with pytest.raises(StorageUnavailable):
        calculate(data, PriceCatalog(unreachable_db))
