"""
Module 'payments' (feature-first): point d'entrée public.
Réunit line items Stripe, metadata de session, client Stripe et traitement des webhooks.
"""

from .cart import to_line_items
from .metadata import make_metadata, extract_order_id
from .stripe_client import StripeGateway
from .service import WebhookHandler

__all__ = [
    "to_line_items",
    "make_metadata",
    "extract_order_id",
    "StripeGateway",
    "WebhookHandler",
]
