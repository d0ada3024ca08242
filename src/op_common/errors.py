"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Upstream (Shopify Admin API)
  2xxx: Orders / fulfillment
  3xxx: Address overrides
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Upstream ---

UPSTREAM_UNREACHABLE_MESSAGE = "Could not reach the server. Check that the backend is running."


class UpstreamUnavailableError(AppError):
    """Network/connectivity failure: no response was received."""

    def __init__(self) -> None:
        super().__init__(1001, UPSTREAM_UNREACHABLE_MESSAGE, 503)


class UpstreamError(AppError):
    """Upstream answered with a non-2xx status; its message is surfaced as-is."""

    def __init__(self, status: int, message: str) -> None:
        self.upstream_status = status
        super().__init__(1002, message or f"Error {status}", 502)


class UpstreamNotFoundError(AppError):
    def __init__(self, resource: str) -> None:
        super().__init__(1003, f"Not found upstream: {resource}", 404)


# --- 2xxx: Orders ---

class OrderNotFoundError(AppError):
    def __init__(self, order_id: int | str) -> None:
        super().__init__(2001, f"Order not found: {order_id}", 404)


class NoFulfillmentOrderError(AppError):
    def __init__(self, order_id: int | str) -> None:
        super().__init__(2002, f"No fulfillment order found for order {order_id}", 422)


class BulkFulfillFailedError(AppError):
    def __init__(self, failed: int, attempted: int) -> None:
        self.failed = failed
        self.attempted = attempted
        super().__init__(
            2003,
            f"Bulk fulfillment failed: {failed} of {attempted} requests did not succeed",
            502,
        )


# --- 3xxx: Address overrides ---

class OverrideNotFoundError(AppError):
    def __init__(self, order_id: int | str) -> None:
        super().__init__(3001, f"No address override for order {order_id}", 404)


class NoShippingAddressError(AppError):
    def __init__(self, order_id: int | str) -> None:
        super().__init__(3002, f"Order {order_id} has no shipping address to override", 422)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
