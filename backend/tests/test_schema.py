"""
Relational schema tests.

Verifies:
- Timestamps are set on insert and refreshed on update, never by callers
- Deleting a referenced row is refused, both through the service and raw ORM
- Sale/expense ids are sequential integers; other ids are UUIDs
- Money keeps exactly two decimal places
"""

import uuid
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

import backoffice.models.base as models_base
from backoffice.errors import RecordNotFoundError, ReferentialIntegrityError
from backoffice.models import User, Store, ProductCategory, Product, Customer, Sale, Expense
from backoffice.money import line_total, to_money
from backoffice.services import integrity_service
from backoffice.validation import ValidationError


def _sale(owner, store, product, customer, quantity=2, unit_price="4.50", **kwargs):
    return Sale(
        customer_id=customer.id,
        user_id=owner.id,
        store_id=store.id,
        product_id=product.id,
        quantity=quantity,
        unit_price=to_money(unit_price),
        total_price=line_total(unit_price, quantity),
        **kwargs,
    )


def _expense(store, product, customer, quantity=1, unit_price="3.00"):
    return Expense(
        customer_id=customer.id,
        store_id=store.id,
        product_id=product.id,
        quantity=quantity,
        unit_price=to_money(unit_price),
        total_price=line_total(unit_price, quantity),
    )


class _Clock:
    """Stands in for utcnow so stamps are predictable."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now


# =============================================================================
# TIMESTAMPS
# =============================================================================


class TestTimestamps:

    def test_insert_sets_both_stamps(self, db_session, owner, monkeypatch):
        clock = _Clock(datetime(2024, 3, 1, 9, 0, 0))
        monkeypatch.setattr(models_base, "utcnow", clock)

        store = Store(user_id=owner.id, name="Harbour")
        db_session.add(store)
        db_session.commit()

        assert store.created_at == clock.now
        assert store.updated_at == clock.now

    def test_update_refreshes_only_updated_at(self, db_session, owner, monkeypatch):
        clock = _Clock(datetime(2024, 3, 1, 9, 0, 0))
        monkeypatch.setattr(models_base, "utcnow", clock)

        store = Store(user_id=owner.id, name="Harbour")
        db_session.add(store)
        db_session.commit()
        created = store.created_at

        clock.now = clock.now + timedelta(hours=2)
        store.name = "Harbour East"
        db_session.commit()

        assert store.created_at == created
        assert store.updated_at == clock.now
        assert store.updated_at > store.created_at

    def test_unchanged_row_keeps_updated_at(self, db_session, owner, monkeypatch):
        clock = _Clock(datetime(2024, 3, 1, 9, 0, 0))
        monkeypatch.setattr(models_base, "utcnow", clock)

        store = Store(user_id=owner.id, name="Harbour")
        db_session.add(store)
        db_session.commit()

        clock.now = clock.now + timedelta(hours=2)
        assert store.name == "Harbour"
        store.name = "Harbour"
        db_session.commit()

        assert store.updated_at == datetime(2024, 3, 1, 9, 0, 0)

    def test_every_entity_is_timestamped(self):
        for model in (User, Store, ProductCategory, Product, Customer, Sale, Expense):
            assert issubclass(model, models_base.Timestamped)


# =============================================================================
# RESTRICT ON DELETE
# =============================================================================


class TestRestrictOnDelete:

    def test_store_with_product_cannot_be_deleted(self, db_session, store, product):
        with pytest.raises(ReferentialIntegrityError) as exc_info:
            integrity_service.delete_record(Store, store.id)
        assert "products" in str(exc_info.value)
        assert db_session.get(Store, store.id) is not None

    def test_store_deletes_once_product_is_gone(self, db_session, store, product):
        integrity_service.delete_record(Product, product.id)
        integrity_service.delete_record(Store, store.id)
        assert db_session.get(Store, store.id) is None

    def test_raw_orm_delete_is_refused_by_database(self, db_session, store, product):
        db_session.delete(store)
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

        assert db_session.get(Store, store.id) is not None
        assert db_session.get(Product, product.id).store_id == store.id

    def test_user_with_store_cannot_be_deleted(self, db_session, owner, store):
        with pytest.raises(ReferentialIntegrityError):
            integrity_service.delete_record(User, owner.id)

    def test_category_with_product_cannot_be_deleted(self, db_session, category, product):
        with pytest.raises(ReferentialIntegrityError):
            integrity_service.delete_record(ProductCategory, category.id)

    def test_customer_with_sale_cannot_be_deleted(self, db_session, owner, store, product, customer):
        db_session.add(_sale(owner, store, product, customer))
        db_session.commit()
        with pytest.raises(ReferentialIntegrityError) as exc_info:
            integrity_service.delete_record(Customer, customer.id)
        assert "sales" in str(exc_info.value)

    def test_product_with_expense_cannot_be_deleted(self, db_session, store, product, customer):
        db_session.add(_expense(store, product, customer))
        db_session.commit()
        with pytest.raises(ReferentialIntegrityError) as exc_info:
            integrity_service.delete_record(Product, product.id)
        assert "expenses" in str(exc_info.value)

    def test_leaf_rows_delete_freely(self, db_session, owner, store, product, customer):
        sale = _sale(owner, store, product, customer)
        db_session.add(sale)
        db_session.commit()
        integrity_service.delete_record(Sale, sale.id)
        assert db_session.get(Sale, sale.id) is None

    def test_missing_record(self, db_session):
        with pytest.raises(RecordNotFoundError):
            integrity_service.delete_record(Store, uuid.uuid4())

    def test_unsupported_model(self, db_session):
        class NotAnEntity:
            pass

        with pytest.raises(ValueError):
            integrity_service.delete_record(NotAnEntity, 1)

    def test_blocking_dependent_lookup(self, db_session, store, product):
        assert integrity_service.find_blocking_dependent(Store, store.id) == "products"
        assert integrity_service.find_blocking_dependent(Product, product.id) is None


# =============================================================================
# IDENTIFIERS AND CONSTRAINTS
# =============================================================================


class TestIdentifiers:

    def test_sale_ids_are_sequential(self, db_session, owner, store, product, customer):
        first = _sale(owner, store, product, customer)
        second = _sale(owner, store, product, customer)
        db_session.add(first)
        db_session.commit()
        db_session.add(second)
        db_session.commit()

        assert isinstance(first.id, int)
        assert second.id > first.id

    def test_expense_ids_are_sequential(self, db_session, store, product, customer):
        first = _expense(store, product, customer)
        second = _expense(store, product, customer)
        db_session.add_all([first, second])
        db_session.commit()
        low, high = sorted([first.id, second.id])
        assert high == low + 1

    def test_entity_ids_are_uuids(self, owner, store, category, product, customer):
        for entity in (owner, store, category, product, customer):
            assert isinstance(entity.id, uuid.UUID)

    def test_sale_defaults_to_pending(self, db_session, owner, store, product, customer):
        sale = _sale(owner, store, product, customer)
        db_session.add(sale)
        db_session.commit()
        assert sale.status == "pending"

    def test_unknown_sale_status_is_refused(self, db_session, owner, store, product, customer):
        db_session.add(_sale(owner, store, product, customer, status="refunded"))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_sale_needs_existing_customer(self, db_session, owner, store, product):
        orphan = Sale(
            customer_id=uuid.uuid4(),
            user_id=owner.id,
            store_id=store.id,
            product_id=product.id,
            quantity=1,
            unit_price=Decimal("1.00"),
            total_price=Decimal("1.00"),
        )
        db_session.add(orphan)
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    @pytest.mark.parametrize("variant", ["OWNER@shop.test", " Owner@Shop.Test "])
    def test_normalized_email_blocks_case_variants(self, db_session, owner, variant):
        db_session.add(User(name="Shadow", email=variant, password="x"))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_normalized_email_blocks_non_ascii_case_variants(self, db_session):
        db_session.add(User(name="Zoe", email="ZOË@x.com", password="x"))
        db_session.commit()
        db_session.add(User(name="Zoe Two", email="zoë@x.com", password="x"))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_normalized_email_follows_email_updates(self, db_session, owner):
        assert owner.email_normalized == "owner@shop.test"
        owner.email = "Ö.Owner@Shop.test"
        db_session.commit()
        assert owner.email == "Ö.Owner@Shop.test"
        assert owner.email_normalized == "ö.owner@shop.test"


# =============================================================================
# MONEY
# =============================================================================


class TestMoney:

    def test_price_round_trips_with_two_places(self, db_session, product):
        db_session.expire(product)
        assert product.price == Decimal("4.50")
        assert str(product.price) == "4.50"

    def test_sale_totals(self, db_session, owner, store, product, customer):
        sale = _sale(owner, store, product, customer, quantity=3, unit_price="0.10")
        db_session.add(sale)
        db_session.commit()
        db_session.expire(sale)
        assert sale.total_price == Decimal("0.30")
        assert sale.to_dict()["totalPrice"] == "0.30"

    @pytest.mark.parametrize("raw,expected", [
        ("4.5", Decimal("4.50")),
        (7, Decimal("7.00")),
        (Decimal("0.005"), Decimal("0.01")),
        (" 12.345 ", Decimal("12.35")),
        ("-2.499", Decimal("-2.50")),
    ])
    def test_to_money_quantizes(self, raw, expected):
        assert to_money(raw) == expected

    @pytest.mark.parametrize("raw", [0.1, True, None, "abc", "NaN", "Infinity", "1e20"])
    def test_to_money_rejects(self, raw):
        with pytest.raises(ValidationError):
            to_money(raw)

    def test_line_total(self):
        assert line_total("19.99", 3) == Decimal("59.97")

    @pytest.mark.parametrize("quantity", [1.5, "2", True])
    def test_line_total_requires_integer_quantity(self, quantity):
        with pytest.raises(ValidationError):
            line_total("1.00", quantity)
