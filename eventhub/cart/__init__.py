"""Cart package: models, storage, and manager facade."""
from .models import Cart, CartLine, MalformedCart
from .service import CartManager, get_cart_manager
from .storage import CartStorage, FileCartStorage, MemoryCartStorage, RedisCartStorage

__all__ = [
    "Cart",
    "CartLine",
    "MalformedCart",
    "CartManager",
    "get_cart_manager",
    "CartStorage",
    "FileCartStorage",
    "MemoryCartStorage",
    "RedisCartStorage",
]
