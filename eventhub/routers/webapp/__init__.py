"""WebApp API Router.

Combines all sub-routers into a single router with prefix /api.
"""

from fastapi import APIRouter

from .admin import router as admin_router
from .auth import router as auth_router
from .cart import router as cart_router
from .catalog import router as catalog_router
from .orders import router as orders_router
from .vendor import router as vendor_router

router = APIRouter(prefix="/api", tags=["webapp"])

router.include_router(auth_router)
router.include_router(catalog_router)
router.include_router(cart_router)
router.include_router(orders_router)
router.include_router(vendor_router)
router.include_router(admin_router)

__all__ = ["router"]
