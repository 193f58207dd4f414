"""Ordering domain API package."""

from ordering.api.errors import register_order_exception_handlers
from ordering.api.routes import admin_order_router, order_router, seller_order_router

__all__ = [
    "admin_order_router",
    "order_router",
    "register_order_exception_handlers",
    "seller_order_router",
]
