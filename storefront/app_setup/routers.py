"""
Registre central des routers (API v1, webhook, health).
"""
from fastapi import FastAPI
from storefront.catalog.views import router as catalog_router
from storefront.cart.views import router as cart_router
from storefront.users.views import router as users_router
from storefront.orders.views import router as orders_router
from storefront.payments.views import router as payments_router
from storefront.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    # API v1
    app.include_router(catalog_router)
    app.include_router(cart_router)
    app.include_router(users_router)
    app.include_router(orders_router)
    # Webhook Stripe (body brut)
    app.include_router(payments_router)
    # Health & monitoring
    app.include_router(health_router)
