"""
Fournisseurs de dépendances FastAPI (Depends).
Construisent explicitement repositories, services et client Stripe à partir de la configuration;
les tests les remplacent via app.dependency_overrides.
"""
from fastapi import Depends
from supabase import Client

from storefront import config
from storefront.catalog.repository import CatalogRepository
from storefront.catalog.service import CatalogService
from storefront.infra.supabase_client import get_service_supabase, get_supabase
from storefront.orders.repository import OrderRepository
from storefront.orders.service import OrderService
from storefront.payments.service import WebhookHandler
from storefront.payments.stripe_client import StripeGateway
from storefront.users.repository import UserRepository
from storefront.users.service import UserService


def get_public_client() -> Client:
    return get_supabase()


def get_service_client() -> Client:
    return get_service_supabase()


def get_catalog_repository(client: Client = Depends(get_public_client)) -> CatalogRepository:
    return CatalogRepository(client)


def get_user_repository(client: Client = Depends(get_service_client)) -> UserRepository:
    return UserRepository(client)


def get_order_repository(client: Client = Depends(get_service_client)) -> OrderRepository:
    return OrderRepository(client)


def get_payment_gateway() -> StripeGateway:
    return StripeGateway(
        secret_key=config.STRIPE_SECRET_KEY,
        webhook_secret=config.STRIPE_WEBHOOK_SECRET,
        success_url=config.CHECKOUT_SUCCESS_URL,
        cancel_url=config.CHECKOUT_CANCEL_URL,
        currency=config.STRIPE_CURRENCY,
    )


def get_catalog_service(repository: CatalogRepository = Depends(get_catalog_repository)) -> CatalogService:
    return CatalogService(repository)


def get_user_service(repository: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(repository)


def get_order_service(
    orders: OrderRepository = Depends(get_order_repository),
    catalog: CatalogRepository = Depends(get_catalog_repository),
    users: UserRepository = Depends(get_user_repository),
    gateway: StripeGateway = Depends(get_payment_gateway),
) -> OrderService:
    return OrderService(orders=orders, catalog=catalog, users=users, gateway=gateway)


def get_webhook_handler(
    gateway: StripeGateway = Depends(get_payment_gateway),
    orders: OrderRepository = Depends(get_order_repository),
) -> WebhookHandler:
    return WebhookHandler(gateway, orders, config.STRIPE_WEBHOOK_SECRET)
