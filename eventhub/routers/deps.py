"""
Shared Dependencies for Routers

Lazy-loaded singletons: one cart and one checkout sequencer per process,
both bound to the database's session resolver.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from eventhub.cart import CartManager
    from eventhub.orders import CheckoutSequencer


_cart_manager: Optional["CartManager"] = None
_checkout_sequencer: Optional["CheckoutSequencer"] = None


def get_cart_manager_lazy() -> "CartManager":
    """Get or create CartManager singleton (lazy loaded)"""
    global _cart_manager
    if _cart_manager is None:
        from eventhub.cart import get_cart_manager
        _cart_manager = get_cart_manager()
    return _cart_manager


def get_checkout_sequencer() -> "CheckoutSequencer":
    """Get or create the CheckoutSequencer for this process's session."""
    global _checkout_sequencer
    if _checkout_sequencer is None:
        from eventhub.orders import create_checkout_sequencer
        from eventhub.services.database import get_database

        db = get_database()
        _checkout_sequencer = create_checkout_sequencer(
            get_cart_manager_lazy(), db.session, db.orders_repo
        )
    return _checkout_sequencer


def reset_dependencies() -> None:
    """Drop cached singletons (tests, shutdown)."""
    global _cart_manager, _checkout_sequencer
    _cart_manager = None
    _checkout_sequencer = None
