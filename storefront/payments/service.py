"""
Cas d'usage 'payments': traitement des notifications Stripe (webhook).

Transitions appliquées:
- checkout.session.completed / async_payment_succeeded -> paid
- checkout.session.expired / async_payment_failed -> cancelled
- autres types: ignorés
Livraison "au moins une fois": une commande déjà payée/annulée n'est jamais modifiée,
un doublon d'événement est donc un no-op.
"""
import logging
from typing import Any, Dict, Optional

from storefront.errors import ValidationError
from storefront.orders.repository import CANCELLED, PAID, OrderRepository
from storefront.payments.metadata import extract_order_id, read_field
from storefront.payments.stripe_client import StripeGateway

logger = logging.getLogger(__name__)

EVENT_STATUS = {
    "checkout.session.completed": PAID,
    "checkout.session.async_payment_succeeded": PAID,
    "checkout.session.expired": CANCELLED,
    "checkout.session.async_payment_failed": CANCELLED,
}

APPLIED = "applied"
NOOP = "noop"
IGNORED = "ignored"


class WebhookHandler:
    def __init__(self, gateway: StripeGateway, orders: OrderRepository, webhook_secret: str):
        self.gateway = gateway
        self.orders = orders
        self.webhook_secret = webhook_secret

    def handle(self, raw_body: bytes, signature_header: Optional[str]) -> str:
        event = self.gateway.verify_webhook_signature(raw_body, signature_header, self.webhook_secret)
        if event is None:
            logger.warning("payments.webhook rejected: signature verification failed")
            raise ValidationError("Invalid webhook")
        return self.apply_event(event)

    def apply_event(self, event: Dict[str, Any]) -> str:
        event_type = event.get("type") or ""
        status = EVENT_STATUS.get(event_type)
        if status is None:
            logger.info("payments.webhook ignored type=%s", event_type)
            return IGNORED

        session = read_field(read_field(event, "data"), "object") or {}
        order_id = extract_order_id(session)
        if order_id is None:
            order_id = self.gateway.resolve_order_id_from_session(read_field(session, "id") or "")
        if order_id is None:
            logger.warning("payments.webhook no order for type=%s session=%s", event_type, read_field(session, "id"))
            return NOOP

        if self.orders.transition_status(order_id, status):
            logger.info("payments.webhook order_id=%s -> %s", order_id, status)
            return APPLIED

        logger.info(
            "payments.webhook noop order_id=%s current=%s wanted=%s",
            order_id, self.orders.get_order_status(order_id), status,
        )
        return NOOP
