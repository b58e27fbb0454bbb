"""
Sérialisation/désérialisation de la metadata Stripe reliant une session à une commande.
"""
from typing import Any, Dict, Optional

ORDER_ID_KEY = "orderId"

# module storefront.payments.metadata
def read_field(obj: Any, name: str) -> Any:
    """Lecture tolérante: dict (tests, payload JSON) ou StripeObject (attributs)."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)

def make_metadata(order_id: int) -> Dict[str, str]:
    return {ORDER_ID_KEY: str(order_id)}

def extract_order_id(session: Any) -> Optional[int]:
    """
    Extrait l'id de commande depuis session.metadata.orderId.
    - Retourne None si la metadata est absente ou non numérique.
    """
    raw = read_field(read_field(session, "metadata"), ORDER_ID_KEY)
    try:
        order_id = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return order_id if order_id > 0 else None
