"""
Adaptateur Stripe: centralise les appels Checkout et la vérification des webhooks.
Aucune méthode ne lève vers l'appelant: None signifie « indisponible / invalide ».
"""
import json
import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

import stripe

from storefront.orders.pricing import PricedLine
from storefront.payments.cart import to_line_items
from storefront.payments.metadata import extract_order_id, make_metadata, read_field

logger = logging.getLogger(__name__)

# module storefront.payments.stripe_client
class StripeGateway:
    def __init__(
        self,
        *,
        secret_key: str,
        webhook_secret: str,
        success_url: str,
        cancel_url: str,
        currency: str = "usd",
    ):
        self.secret_key = secret_key
        self.webhook_secret = webhook_secret
        self.success_url = success_url
        self.cancel_url = cancel_url
        self.currency = currency

    def create_checkout_link(
        self,
        lines: Iterable[PricedLine],
        shipping_cost: Decimal,
        order_id: int,
    ) -> Optional[str]:
        """
        Crée une session Stripe Checkout (mode=payment) pour une commande.
        - line_items: un par produit + frais de port si > 0
        - metadata: {"orderId": "<id>"} pour retrouver la commande depuis le webhook
        - success_url porte {CHECKOUT_SESSION_ID}, substitué par Stripe
        Retour: URL de redirection, ou None si Stripe échoue ou ne renvoie pas d'URL.
        """
        try:
            session = stripe.checkout.Session.create(
                api_key=self.secret_key,
                line_items=to_line_items(lines, shipping_cost, self.currency),
                mode="payment",
                metadata=make_metadata(order_id),
                success_url=self.success_url,
                cancel_url=self.cancel_url,
            )
        except Exception:
            logger.exception("payments.stripe_client.create_checkout_link failed order_id=%s", order_id)
            return None
        url = read_field(session, "url")
        return url or None

    def get_session(self, session_id: str) -> Any:
        return stripe.checkout.Session.retrieve(session_id, api_key=self.secret_key)

    def resolve_order_id_from_session(self, session_id: str) -> Optional[int]:
        """Relit la session Stripe et retourne metadata.orderId (int) ou None."""
        if not session_id:
            return None
        try:
            session = self.get_session(session_id)
        except Exception:
            logger.warning("payments.stripe_client.resolve_order_id_from_session failed session_id=%s", session_id)
            return None
        return extract_order_id(session)

    def verify_webhook_signature(
        self,
        raw_body: bytes,
        signature_header: Optional[str],
        webhook_secret: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Valide la signature Stripe sur le body brut (octets exacts reçus) puis parse l'événement.
        Retour: dict de l'événement, ou None pour toute erreur (jamais d'exception, jamais de détail).
        """
        secret = webhook_secret if webhook_secret is not None else self.webhook_secret
        if not raw_body or not signature_header or not secret:
            return None
        try:
            stripe.Webhook.construct_event(raw_body, signature_header, secret)
            event = json.loads(raw_body)
        except Exception:
            return None
        return event if isinstance(event, dict) else None
