"""
Construction des line_items Stripe (pas de Stripe, pas de DB).
"""
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from storefront.orders.pricing import PricedLine
from storefront.utils.money import to_minor_units

SHIPPING_LABEL = "Shipping"

# module storefront.payments.cart
def _line_item(name: str, unit_amount: int, quantity: int, currency: str) -> Dict[str, Any]:
    return {
        "quantity": quantity,
        "price_data": {
            "currency": currency,
            "unit_amount": unit_amount,
            "product_data": {"name": name},
        },
    }

def to_line_items(lines: Iterable[PricedLine], shipping_cost: Decimal, currency: str) -> List[Dict[str, Any]]:
    """
    Une ligne par produit résolu (unit_amount = round(prix * 100), en centimes),
    plus une ligne "Shipping" (quantité 1) si les frais de port sont > 0.
    """
    line_items = [
        _line_item(line.label or "Article", to_minor_units(line.unit_price), line.quantity, currency)
        for line in lines
    ]
    if shipping_cost > 0:
        line_items.append(_line_item(SHIPPING_LABEL, to_minor_units(shipping_cost), 1, currency))
    return line_items
