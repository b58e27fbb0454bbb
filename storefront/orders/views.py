# module storefront.orders.views

"""Historique et détail des commandes de l'utilisateur authentifié."""
from fastapi import APIRouter, Depends, Query

from storefront.app_setup.dependencies import get_order_service
from storefront.orders.service import OrderService
from storefront.utils.security import AuthContext, require_user

router = APIRouter(prefix="/api/v1/orders", tags=["Orders API"])


@router.get("")
def list_orders(auth: AuthContext = Depends(require_user), orders: OrderService = Depends(get_order_service)):
    return {"error": None, "orders": orders.list_orders(auth.user_id)}


@router.get("/session")
def get_order_from_session(
    session_id: str = Query(min_length=1),
    auth: AuthContext = Depends(require_user),
    orders: OrderService = Depends(get_order_service),
):
    """Retour de paiement: session Stripe -> id de commande (404 si introuvable ou d'un autre utilisateur)."""
    return {"error": None, "orderId": orders.order_id_from_session(auth.user_id, session_id)}


@router.get("/{order_id}")
def get_order(order_id: int, auth: AuthContext = Depends(require_user), orders: OrderService = Depends(get_order_service)):
    return {"error": None, "order": orders.get_order(auth.user_id, order_id)}
