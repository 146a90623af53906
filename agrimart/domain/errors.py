"""
Typed business errors.

Services raise these at the point of detection, routers translate them
into HTTP responses. Everything else (SQLAlchemy, redis, ...) is an
infrastructure failure and ends up as a generic 500.
"""


class MarketError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MarketError):
    status_code = 400


class NotFoundError(MarketError):
    status_code = 404


class ForbiddenError(MarketError):
    status_code = 403


class ConflictError(MarketError):
    status_code = 409


class AvailabilityError(ValidationError):
    """Product cannot be put in the cart or ordered in the requested quantity."""

    def __init__(self, message: str, reason=None):
        super().__init__(message)
        self.reason = reason


class InsufficientStockError(AvailabilityError):
    pass


class StockConflictError(ConflictError):
    """Stock ran out between cart and checkout, nothing was committed."""

    def __init__(self, message: str, product_id: int):
        super().__init__(message)
        self.product_id = product_id


class ShippingServiceError(MarketError):
    status_code = 502
