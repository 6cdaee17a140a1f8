"""Authentication package."""
from .session import SessionResolver, SignUpRequest, dashboard_route

__all__ = [
    "SessionResolver",
    "SignUpRequest",
    "dashboard_route",
]
