"""Order placement."""
from .checkout import CheckoutSequencer, build_order_items, create_checkout_sequencer

__all__ = [
    "CheckoutSequencer",
    "build_order_items",
    "create_checkout_sequencer",
]
