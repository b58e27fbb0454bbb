"""
Accès aux données (Supabase) pour les commandes.
- Création: une seule transaction via la fonction Postgres create_order_with_items
  (commande + lignes, jamais l'une sans les autres).
- Statut: transition uniquement depuis 'pending' (pending -> paid | cancelled, états terminaux).
"""
from typing import Any, Dict, List, Optional
import logging

from supabase import Client

from storefront.errors import PersistenceError

logger = logging.getLogger(__name__)

PENDING = "pending"
PAID = "paid"
CANCELLED = "cancelled"

ORDER_DETAIL_FIELDS = (
    "id, status, total, shipping_cost, shipping_days, shipping_zipcode, shipping_street, "
    "shipping_number, shipping_city, shipping_state, shipping_country, shipping_complement, created_at, "
    "order_items(id, quantity, price, products(id, label, price, product_images(id, url)))"
)


def _scalar_id(data: Any) -> Optional[int]:
    # rpc() renvoie un scalaire, ou une liste/dict selon la version de postgrest
    if isinstance(data, list):
        data = data[0] if data else None
    if isinstance(data, dict):
        data = data.get("id") or data.get("create_order_with_items")
    try:
        return int(data) if data is not None else None
    except (TypeError, ValueError):
        return None


class OrderRepository:
    def __init__(self, client: Client):
        self.client = client

    def create_order(self, order: Dict[str, Any], items: List[Dict[str, Any]]) -> int:
        try:
            res = self.client.rpc("create_order_with_items", {"p_order": order, "p_items": items}).execute()
        except Exception as e:
            logger.exception("orders.repository.create_order failed user_id=%s", order.get("user_id"))
            raise PersistenceError() from e
        order_id = _scalar_id(res.data)
        if order_id is None:
            logger.error("orders.repository.create_order returned no id user_id=%s", order.get("user_id"))
            raise PersistenceError()
        return order_id

    def get_order_status(self, order_id: int) -> Optional[str]:
        try:
            res = self.client.table("orders").select("status").eq("id", order_id).limit(1).execute()
        except Exception:
            logger.exception("orders.repository.get_order_status failed order_id=%s", order_id)
            return None
        rows = res.data or []
        return rows[0].get("status") if rows else None

    def transition_status(self, order_id: int, status: str) -> bool:
        """Passe la commande de 'pending' à `status`. Retourne False si rien n'a changé."""
        try:
            res = (
                self.client.table("orders")
                .update({"status": status})
                .eq("id", order_id)
                .eq("status", PENDING)
                .execute()
            )
        except Exception as e:
            logger.exception("orders.repository.transition_status failed order_id=%s status=%s", order_id, status)
            raise PersistenceError() from e
        return bool(res.data)

    def list_user_orders(self, user_id: int) -> List[Dict[str, Any]]:
        try:
            res = (
                self.client.table("orders")
                .select("id, status, total, created_at")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
            return res.data or []
        except Exception:
            logger.exception("orders.repository.list_user_orders failed user_id=%s", user_id)
            return []

    def get_user_order(self, order_id: int, user_id: int) -> Optional[Dict[str, Any]]:
        try:
            res = (
                self.client.table("orders")
                .select(ORDER_DETAIL_FIELDS)
                .eq("id", order_id)
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except Exception:
            logger.exception("orders.repository.get_user_order failed order_id=%s", order_id)
            return None
        rows = res.data or []
        return rows[0] if rows else None
