"""Couche service des commandes.
Rôles:
- Assembler une commande depuis un panier: adresse -> tarification -> persistance -> lien de paiement.
- Exposer l'historique et le détail des commandes d'un utilisateur.
- Retrouver la commande d'une session Stripe (page de retour après paiement).
Les étapes d'assemble_order sont strictement séquentielles; un échec du lien de paiement
laisse la commande en 'pending' (pas de rollback compensatoire).
"""
from typing import Any, Dict, List, Sequence
import logging

from storefront.catalog.repository import CatalogRepository
from storefront.errors import InvalidAddress, NotFoundError, PaymentLinkError
from storefront.orders.pricing import CartItem, PricedCart, price_cart
from storefront.orders.repository import PENDING, OrderRepository
from storefront.orders.shipping import ShippingQuote
from storefront.payments.stripe_client import StripeGateway
from storefront.users.repository import UserRepository
from storefront.utils.images import first_image_path
from storefront.utils.money import format_amount

logger = logging.getLogger(__name__)


def build_order_rows(user_id: int, address: Dict[str, Any], priced: PricedCart, shipping: ShippingQuote):
    """Lignes à persister: la commande (adresse copiée) et un order_item par article résolu."""
    order = {
        "user_id": user_id,
        "status": PENDING,
        "total": format_amount(priced.total),
        "shipping_cost": format_amount(priced.shipping_cost),
        "shipping_days": shipping.days,
        "shipping_zipcode": address.get("zipcode"),
        "shipping_street": address.get("street"),
        "shipping_number": address.get("number"),
        "shipping_city": address.get("city"),
        "shipping_state": address.get("state"),
        "shipping_country": address.get("country"),
        "shipping_complement": address.get("complement"),
    }
    items = [
        {"product_id": line.product_id, "quantity": line.quantity, "price": format_amount(line.unit_price)}
        for line in priced.lines
    ]
    return order, items


def _order_detail(row: Dict[str, Any]) -> Dict[str, Any]:
    items = []
    for item in row.get("order_items") or []:
        product = item.get("products") or {}
        items.append({
            "id": item.get("id"),
            "quantity": item.get("quantity"),
            "price": item.get("price"),
            "product": {
                "id": product.get("id"),
                "label": product.get("label"),
                "price": product.get("price"),
                "image": first_image_path(product.get("product_images")),
            },
        })
    return {
        "id": row.get("id"),
        "status": row.get("status"),
        "total": row.get("total"),
        "shippingCost": row.get("shipping_cost"),
        "shippingDays": row.get("shipping_days"),
        "shippingZipcode": row.get("shipping_zipcode"),
        "shippingStreet": row.get("shipping_street"),
        "shippingNumber": row.get("shipping_number"),
        "shippingCity": row.get("shipping_city"),
        "shippingState": row.get("shipping_state"),
        "shippingCountry": row.get("shipping_country"),
        "shippingComplement": row.get("shipping_complement"),
        "createdAt": row.get("created_at"),
        "orderItems": items,
    }


class OrderService:
    def __init__(
        self,
        *,
        orders: OrderRepository,
        catalog: CatalogRepository,
        users: UserRepository,
        gateway: StripeGateway,
    ):
        self.orders = orders
        self.catalog = catalog
        self.users = users
        self.gateway = gateway

    def assemble_order(
        self,
        user_id: int,
        cart: Sequence[CartItem],
        address_id: int,
        shipping: ShippingQuote,
    ) -> str:
        """
        Transforme un panier en commande 'pending' et retourne l'URL de paiement Stripe.
        - InvalidAddress si l'adresse n'appartient pas à l'utilisateur (aucune écriture).
        - Articles introuvables ignorés; si aucun n'est résolu, la commande ne porte que les frais de port.
        - PersistenceError si l'écriture échoue, PaymentLinkError si Stripe ne renvoie pas d'URL.
        """
        address = self.users.get_address(user_id, address_id)
        if not address:
            raise InvalidAddress()

        products = self.catalog.get_products_map(item.product_id for item in cart)
        priced = price_cart(cart, products, shipping.cost)
        if priced.dropped:
            # TODO: remonter les articles ignorés au client (aujourd'hui seulement journalisés)
            logger.warning("orders.assemble user_id=%s dropped unknown products=%s", user_id, list(priced.dropped))

        order_row, item_rows = build_order_rows(user_id, address, priced, shipping)
        order_id = self.orders.create_order(order_row, item_rows)
        logger.info("orders.assemble order_id=%s user_id=%s total=%s", order_id, user_id, order_row["total"])

        url = self.gateway.create_checkout_link(priced.lines, priced.shipping_cost, order_id)
        if not url:
            logger.warning("orders.assemble order_id=%s left pending: no payment url", order_id)
            raise PaymentLinkError()
        return url

    def list_orders(self, user_id: int) -> List[Dict[str, Any]]:
        return [
            {"id": o.get("id"), "status": o.get("status"), "total": o.get("total"), "createdAt": o.get("created_at")}
            for o in self.orders.list_user_orders(user_id)
        ]

    def get_order(self, user_id: int, order_id: int) -> Dict[str, Any]:
        row = self.orders.get_user_order(order_id, user_id)
        if not row:
            raise NotFoundError("Order not found")
        return _order_detail(row)

    def order_id_from_session(self, user_id: int, session_id: str) -> int:
        """Page de retour Stripe: id de commande de la session, si elle appartient à l'utilisateur."""
        order_id = self.gateway.resolve_order_id_from_session(session_id)
        if order_id is None or not self.orders.get_user_order(order_id, user_id):
            raise NotFoundError("Order not found")
        return order_id
