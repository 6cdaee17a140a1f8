"""
Repository Pattern for Database Operations

- ProfileRepository: profile rows behind auth users
- EventRepository: event listings (public catalog, vendor CRUD)
- OrderRepository: orders, order items, vendor sales
"""
from .event_repo import EventRepository
from .order_repo import OrderRepository
from .profile_repo import ProfileRepository

__all__ = [
    "EventRepository",
    "OrderRepository",
    "ProfileRepository",
]
