# storefront/api/__init__.py
from fastapi import FastAPI

from storefront.api.routers import carts, orders, products, users
from storefront.api.routers.health import router as health_router


def create_app(lifespan=None) -> FastAPI:
    app = FastAPI(title="Storefront", version="1.0.0", lifespan=lifespan)

    # Include routers
    app.include_router(health_router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app
