"""
Family Wishlist API Routes Package.

This package contains the FastAPI route handlers.

Example:
    from api.routes import wishlist_router, admin_router

    app.include_router(wishlist_router)
    app.include_router(admin_router)
"""

from api.routes.wishlist import router as wishlist_router
from api.routes.admin import router as admin_router


__all__ = [
    "wishlist_router",
    "admin_router",
]
