"""Bledy domeny sklepu.

Klasy dziedzicza tez po wbudowanych wyjatkach (ValueError, PermissionError,
LookupError), wiec routery moga je lapac tak samo jak wczesniej.
"""


class FreshCartError(Exception):
    """Base exception for all storefront errors."""

    #tytul toasta pokazywanego uzytkownikowi
    title = "Something went wrong"


class CheckoutValidationError(FreshCartError, ValueError):
    """Raised when required checkout fields are missing."""

    title = "Missing information"

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Please fill in: {', '.join(self.missing)}")


class EmptyCartError(FreshCartError, ValueError):
    title = "Your cart is empty"

    def __init__(self):
        super().__init__("Add some products to your cart before checking out")


class CheckoutStateError(FreshCartError, ValueError):
    """Raised when a checkout action is not allowed in the current step."""

    title = "Checkout step"

    def __init__(self, action: str, step: str | None):
        self.action = action
        self.step = step
        if step is None:
            msg = f"Cannot {action}: checkout has not been started"
        else:
            msg = f"Cannot {action} during the {step} step"
        super().__init__(msg)


class AuthRequiredError(FreshCartError, PermissionError):
    """Raised when an action needs a signed-in user."""

    title = "Authentication required"
    redirect = "/login"

    def __init__(self, message: str = "Please sign in to continue"):
        super().__init__(message)


class RemoteWriteError(FreshCartError):
    """A write to the persistence service failed.

    ``critical`` writes abort the order pipeline and are surfaced; the others
    are only logged.
    """

    critical = True
    step = "write"

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class ProfileSyncError(RemoteWriteError):
    critical = False
    step = "profile_sync"
    title = "Profile not updated"


class OrderCreateError(RemoteWriteError):
    step = "order_create"
    title = "Order failed"

    def __init__(self, cause: Exception | None = None):
        super().__init__(
            "We could not create your order. Your cart was kept, please try again.",
            cause,
        )


class OrderLinesError(RemoteWriteError):
    step = "order_lines"
    title = "Order items failed"

    def __init__(self, cause: Exception | None = None):
        super().__init__(
            "We could not save the items of your order. Your cart was kept, please try again.",
            cause,
        )


class OrderNotFoundError(FreshCartError, LookupError):
    title = "Order not found"

    def __init__(self, order_id: str | None = None):
        self.order_id = order_id
        msg = "No order found for this account"
        if order_id:
            msg = f"Order not found: {order_id}"
        super().__init__(msg)


class EmailDispatchError(FreshCartError):
    """Confirmation email failed. The order itself is already saved."""

    title = "Email not sent"
    retryable = True

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"We could not send your confirmation email ({reason}). You can retry.")


class CheckoutInProgressError(FreshCartError, RuntimeError):
    title = "Order in progress"

    def __init__(self):
        super().__init__("Your order is already being placed")


class ProductNotFoundError(FreshCartError, LookupError):
    title = "Product not found"

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class AdminRequiredError(FreshCartError, PermissionError):
    title = "Not allowed"

    def __init__(self):
        super().__init__("Only administrators can change order status")


class CheckoutUnavailableError(FreshCartError):
    """The checkout lock could not be taken because its store is down."""

    title = "Checkout unavailable"
    retryable = True

    def __init__(self, cause: Exception | None = None):
        self.cause = cause
        super().__init__("We could not start placing your order right now. Your cart was kept, please try again.")


class CatalogUnavailableError(FreshCartError):
    title = "Catalog unavailable"
    retryable = True

    def __init__(self, cause: Exception | None = None):
        self.cause = cause
        super().__init__("We could not reach the product catalog. Please try again in a moment.")
