"""Domain services built on repositories and the session resolver."""
from .admin import AdminDomain
from .vendor import VendorDomain

__all__ = [
    "AdminDomain",
    "VendorDomain",
]
