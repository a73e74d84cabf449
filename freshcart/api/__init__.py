# freshcart/api/__init__.py
from fastapi import FastAPI

from freshcart.api.errors import freshcart_error_handler
from freshcart.api.routers import carts, checkout, health, orders, users, wishlist
from freshcart.domain.errors import FreshCartError


def create_app() -> FastAPI:
    app = FastAPI(
        title="FreshCart Storefront",
        version="1.0.0",
    )

    app.add_exception_handler(FreshCartError, freshcart_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(carts.router)
    app.include_router(wishlist.router)
    app.include_router(checkout.router)
    app.include_router(orders.router)

    return app
