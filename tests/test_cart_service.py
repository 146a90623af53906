from decimal import Decimal

import pytest
from sqlalchemy import select

from agrimart.data.models import CartItemModel, ProductModel
from agrimart.domain.enums import ProductStatus
from agrimart.domain.errors import (
    AvailabilityError,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from agrimart.services.cart_service import CartService


def _quantity(db, user_id, product_id):
    return db.execute(
        select(CartItemModel.quantity).where(
            CartItemModel.user_id == user_id,
            CartItemModel.product_id == product_id,
        )
    ).scalar_one_or_none()


class TestCartScenario:
    def test_add_add_set_set(self, db, buyer_id, make_product):
        """stock 5, min order 2: add 3, add 3 more, set 1, set 0."""
        p1 = make_product(stock=5, min_order=2)
        svc = CartService(db)

        assert svc.add_or_increment(buyer_id, p1, 3) == 3
        assert _quantity(db, buyer_id, p1) == 3

        with pytest.raises(InsufficientStockError) as exc:
            svc.add_or_increment(buyer_id, p1, 3)
        assert exc.value.message.lower() == "insufficient stock, available: 5"
        assert _quantity(db, buyer_id, p1) == 3

        with pytest.raises(AvailabilityError) as exc:
            svc.set_quantity(buyer_id, p1, 1)
        assert exc.value.message == "Quantity must be at least 2"
        assert _quantity(db, buyer_id, p1) == 3

        assert svc.set_quantity(buyer_id, p1, 0) == 0
        assert _quantity(db, buyer_id, p1) is None


class TestAddOrIncrement:
    def test_rejects_non_positive_quantity(self, db, buyer_id, make_product):
        p1 = make_product()
        with pytest.raises(ValidationError):
            CartService(db).add_or_increment(buyer_id, p1, 0)

    def test_missing_product(self, db, buyer_id):
        with pytest.raises(NotFoundError) as exc:
            CartService(db).add_or_increment(buyer_id, 999, 1)
        assert exc.value.message == "Product not found or deleted"

    def test_deleted_product(self, db, buyer_id, make_product):
        p1 = make_product(status=ProductStatus.DELETED)
        with pytest.raises(NotFoundError):
            CartService(db).add_or_increment(buyer_id, p1, 1)

    def test_sold_out_product(self, db, buyer_id, make_product):
        p1 = make_product(status=ProductStatus.SOLD_OUT)
        with pytest.raises(AvailabilityError) as exc:
            CartService(db).add_or_increment(buyer_id, p1, 1)
        assert exc.value.message == "Product is currently sold out"

    def test_pre_order_ignores_stock(self, db, buyer_id, make_product):
        p1 = make_product(status=ProductStatus.PRE_ORDER, stock=0, min_order=10)
        assert CartService(db).add_or_increment(buyer_id, p1, 25) == 25

    def test_pre_order_increment_below_minimum(self, db, buyer_id, make_product):
        p1 = make_product(status=ProductStatus.PRE_ORDER, stock=0, min_order=5)
        svc = CartService(db)
        svc.add_or_increment(buyer_id, p1, 5)

        with pytest.raises(AvailabilityError) as exc:
            svc.add_or_increment(buyer_id, p1, 1)
        assert exc.value.message == "Quantity must be at least 5 for pre-order items"
        assert _quantity(db, buyer_id, p1) == 5

    def test_increment_keeps_a_single_line(self, db, buyer_id, make_product):
        p1 = make_product(stock=10)
        svc = CartService(db)
        svc.add_or_increment(buyer_id, p1, 2)
        svc.add_or_increment(buyer_id, p1, 4)

        lines = db.execute(select(CartItemModel).where(CartItemModel.user_id == buyer_id)).scalars().all()
        assert len(lines) == 1
        assert lines[0].quantity == 6


class TestSetQuantity:
    def test_absolute_quantity(self, db, buyer_id, make_product):
        p1 = make_product(stock=10)
        svc = CartService(db)
        svc.add_or_increment(buyer_id, p1, 2)
        assert svc.set_quantity(buyer_id, p1, 7) == 7
        assert _quantity(db, buyer_id, p1) == 7

    def test_above_stock(self, db, buyer_id, make_product):
        p1 = make_product(stock=4)
        svc = CartService(db)
        svc.add_or_increment(buyer_id, p1, 2)
        with pytest.raises(InsufficientStockError):
            svc.set_quantity(buyer_id, p1, 5)

    def test_line_must_exist(self, db, buyer_id, make_product):
        p1 = make_product()
        with pytest.raises(NotFoundError) as exc:
            CartService(db).set_quantity(buyer_id, p1, 0)
        assert exc.value.message == "Product not found in cart"

    def test_negative_quantity(self, db, buyer_id, make_product):
        p1 = make_product()
        with pytest.raises(ValidationError):
            CartService(db).set_quantity(buyer_id, p1, -1)

    def test_by_line_id_checks_owner(self, db, buyer_id, make_user, make_product):
        p1 = make_product()
        svc = CartService(db)
        svc.add_or_increment(buyer_id, p1, 1)
        line_id = svc.list_cart(buyer_id).lines[0].line.id

        other = make_user("Siti")
        with pytest.raises(NotFoundError) as exc:
            svc.set_line_quantity(other, line_id, 2)
        assert exc.value.message == "Cart item not found or does not belong to user"

        assert svc.set_line_quantity(buyer_id, line_id, 2) == 2


class TestApplyDelta:
    def test_deltas_are_associative(self, db, make_user, make_product):
        p1 = make_product(stock=20)
        a, b = make_user("A"), make_user("B")
        svc = CartService(db)
        svc.add_or_increment(a, p1, 5)
        svc.add_or_increment(b, p1, 5)

        for delta in (2, -1, 3):
            svc.apply_delta(a, p1, delta)
        svc.apply_delta(b, p1, 4)

        assert _quantity(db, a, p1) == _quantity(db, b, p1) == 9

    def test_zero_or_below_removes_line(self, db, buyer_id, make_product):
        p1 = make_product()
        svc = CartService(db)
        svc.add_or_increment(buyer_id, p1, 2)
        assert svc.apply_delta(buyer_id, p1, -5) == 0
        assert _quantity(db, buyer_id, p1) is None

    def test_non_integer_delta(self, db, buyer_id, make_product):
        p1 = make_product()
        svc = CartService(db)
        svc.add_or_increment(buyer_id, p1, 2)
        for delta in ("2", 1.5, True):
            with pytest.raises(ValidationError):
                svc.apply_delta(buyer_id, p1, delta)

    def test_line_must_exist(self, db, buyer_id, make_product):
        p1 = make_product()
        with pytest.raises(NotFoundError):
            CartService(db).apply_delta(buyer_id, p1, 1)

    def test_above_stock(self, db, buyer_id, make_product):
        p1 = make_product(stock=3)
        svc = CartService(db)
        svc.add_or_increment(buyer_id, p1, 2)
        with pytest.raises(InsufficientStockError):
            svc.apply_delta(buyer_id, p1, 2)
        assert _quantity(db, buyer_id, p1) == 2

    def test_deleted_product_drops_the_line(self, db, buyer_id, make_product):
        p1 = make_product()
        svc = CartService(db)
        svc.add_or_increment(buyer_id, p1, 2)

        db.get(ProductModel, p1).status = ProductStatus.DELETED
        db.commit()

        with pytest.raises(NotFoundError) as exc:
            svc.apply_delta(buyer_id, p1, 1)
        assert exc.value.message == "Product is no longer available"
        assert _quantity(db, buyer_id, p1) is None


class TestRemove:
    def test_remove(self, db, buyer_id, make_product):
        p1 = make_product()
        svc = CartService(db)
        svc.add_or_increment(buyer_id, p1, 1)
        svc.remove(buyer_id, p1)
        assert _quantity(db, buyer_id, p1) is None

    def test_remove_missing(self, db, buyer_id, make_product):
        p1 = make_product()
        with pytest.raises(NotFoundError) as exc:
            CartService(db).remove(buyer_id, p1)
        assert exc.value.message == "Product not found in cart"

    def test_remove_line_of_another_user(self, db, buyer_id, make_user, make_product):
        p1 = make_product()
        svc = CartService(db)
        svc.add_or_increment(buyer_id, p1, 1)
        line_id = svc.list_cart(buyer_id).lines[0].line.id

        with pytest.raises(NotFoundError):
            svc.remove_line(make_user("Siti"), line_id)
        assert _quantity(db, buyer_id, p1) == 1


class TestListCart:
    def test_totals(self, db, buyer_id, make_product):
        p1 = make_product(price="1000.00", weight=500)
        p2 = make_product(price="5000.00", weight=1000, name="Cabai")
        svc = CartService(db)
        svc.add_or_increment(buyer_id, p1, 2)
        svc.add_or_increment(buyer_id, p2, 1)

        summary = svc.list_cart(buyer_id)
        assert [v.product.id for v in summary.lines] == [p1, p2]
        assert summary.total_weight == 2000
        assert summary.total_price == Decimal("7000")

    def test_deleted_products_are_hidden(self, db, buyer_id, make_product):
        p1 = make_product()
        p2 = make_product(name="Cabai")
        svc = CartService(db)
        svc.add_or_increment(buyer_id, p1, 1)
        svc.add_or_increment(buyer_id, p2, 1)

        db.get(ProductModel, p2).status = ProductStatus.DELETED
        db.commit()

        assert [v.product.id for v in svc.list_cart(buyer_id).lines] == [p1]

    def test_empty(self, db, buyer_id):
        summary = CartService(db).list_cart(buyer_id)
        assert summary.lines == []
        assert summary.total_weight == 0
        assert summary.total_price == Decimal("0")
