# agrimart/domain/availability.py
"""
Availability rules for putting a product in a cart (and keeping it there
until checkout).

Every write path touching a cart line goes through ``evaluate`` so the
rules live in exactly one place.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from agrimart.domain.entities import Product
from agrimart.domain.enums import ProductStatus
from agrimart.domain.errors import AvailabilityError, InsufficientStockError, NotFoundError


class RejectReason(str, Enum):
    DELETED = "deleted"
    SOLD_OUT = "sold_out"
    BELOW_MINIMUM = "below_minimum"
    INSUFFICIENT_STOCK = "insufficient_stock"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class Decision:
    accepted: bool
    reason: Optional[RejectReason] = None
    message: Optional[str] = None

    @classmethod
    def accept(cls) -> "Decision":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectReason, message: str) -> "Decision":
        return cls(accepted=False, reason=reason, message=message)


def _coerce_status(status: Union[ProductStatus, str]) -> Optional[ProductStatus]:
    try:
        return ProductStatus(status)
    except ValueError:
        return None


def evaluate(product: Product, requested_quantity: int, existing_quantity: int = 0) -> Decision:
    """
    Decide whether ``requested_quantity`` more units of ``product`` may sit
    in a cart that already holds ``existing_quantity`` of it.

    Ready-stock bounds are checked against the cumulative quantity, the
    pre-order minimum against the requested quantity alone. First matching
    rule wins: deleted, sold out, pre-order minimum, ready-stock minimum and
    stock, anything else is unavailable.
    """
    quantity = existing_quantity + requested_quantity
    status = _coerce_status(product.status)

    if status == ProductStatus.DELETED:
        return Decision.reject(RejectReason.DELETED, "Product not found or deleted")

    if status == ProductStatus.SOLD_OUT:
        return Decision.reject(RejectReason.SOLD_OUT, "Product is currently sold out")

    if status == ProductStatus.PRE_ORDER:
        #per request, not cumulative
        if requested_quantity < product.min_order:
            return Decision.reject(
                RejectReason.BELOW_MINIMUM,
                f"Quantity must be at least {product.min_order} for pre-order items",
            )
        return Decision.accept()

    if status == ProductStatus.READY_STOCK:
        if quantity < product.min_order:
            return Decision.reject(
                RejectReason.BELOW_MINIMUM,
                f"Quantity must be at least {product.min_order}",
            )
        if quantity > product.stock:
            return Decision.reject(
                RejectReason.INSUFFICIENT_STOCK,
                f"Insufficient stock, available: {product.stock}",
            )
        return Decision.accept()

    return Decision.reject(RejectReason.UNAVAILABLE, "Product is currently unavailable")


def ensure_available(product: Product, requested_quantity: int, existing_quantity: int = 0) -> None:
    """Same as ``evaluate`` but raises the matching typed error on rejection."""
    decision = evaluate(product, requested_quantity, existing_quantity)
    if decision.accepted:
        return

    if decision.reason == RejectReason.DELETED:
        raise NotFoundError(decision.message)
    if decision.reason == RejectReason.INSUFFICIENT_STOCK:
        raise InsufficientStockError(decision.message, reason=decision.reason)
    raise AvailabilityError(decision.message, reason=decision.reason)
