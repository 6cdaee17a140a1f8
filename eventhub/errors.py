"""
Error constants and exception types.

Message constants are shared by the services and the HTTP layer so the same
text reaches the user whichever surface raised it.
"""
from typing import Optional

# Session errors
ERROR_UNAUTHENTICATED = "Please sign in to continue"
ERROR_PROFILE_NOT_FOUND = "Profile not found"
ERROR_PERMISSION_DENIED = "You do not have access to this page"

# Cart / checkout errors
ERROR_EMPTY_CART = "Your cart is empty"
ERROR_CHECKOUT_IN_PROGRESS = "Your order is already being processed"
ERROR_ORDER_CREATE_FAILED = "Failed to place order. Please try again."
ERROR_ORDER_ITEMS_CREATE_FAILED = "Failed to save order items. Please try again."

# Vendor / admin errors
ERROR_EVENT_NOT_SAVED = "The event could not be saved"
ERROR_REMOTE = "The request to the server failed"
ERROR_INVALID_REQUEST = "Invalid request"


class EventHubError(Exception):
    """Base class for all client errors."""

    default_message = ERROR_INVALID_REQUEST

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(EventHubError):
    default_message = ERROR_UNAUTHENTICATED


class ProfileNotFound(EventHubError):
    default_message = ERROR_PROFILE_NOT_FOUND


class PermissionDenied(EventHubError):
    default_message = ERROR_PERMISSION_DENIED


class ValidationFailed(EventHubError):
    default_message = ERROR_INVALID_REQUEST


class RemoteOperationFailed(EventHubError):
    """A Supabase call failed outside of checkout."""

    default_message = ERROR_REMOTE

    def __init__(self, cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.cause = cause
        super().__init__(message)


class CheckoutError(EventHubError):
    """Base class for checkout failures."""


class EmptyCart(CheckoutError):
    default_message = ERROR_EMPTY_CART


class CheckoutInProgress(CheckoutError):
    default_message = ERROR_CHECKOUT_IN_PROGRESS


class OrderCreateFailed(CheckoutError):
    """Order row could not be created; nothing was written remotely."""

    default_message = ERROR_ORDER_CREATE_FAILED

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__()


class OrderItemsCreateFailed(CheckoutError):
    """
    Order items could not be created after the order row was.

    `compensation_error` is None when the compensating delete of the order
    succeeded, otherwise the error that left the order row orphaned.
    """

    default_message = ERROR_ORDER_ITEMS_CREATE_FAILED

    def __init__(
        self,
        cause: BaseException,
        order_id: Optional[str] = None,
        compensation_error: Optional[BaseException] = None,
    ):
        self.cause = cause
        self.order_id = order_id
        self.compensation_error = compensation_error
        super().__init__()

    @property
    def order_orphaned(self) -> bool:
        return self.compensation_error is not None
