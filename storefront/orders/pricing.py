"""
Tarification pure d'un panier (pas de DB, pas de Stripe).
- Un article dont le produit est introuvable est ignoré (panier potentiellement périmé):
  il n'entre ni dans le total ni dans les lignes de commande.
- total = Σ prix unitaire × quantité + frais de port, arrondi au centime une seule fois.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from storefront.utils.money import quantize


@dataclass(frozen=True)
class CartItem:
    product_id: int
    quantity: int


@dataclass(frozen=True)
class PricedLine:
    product_id: int
    label: str
    unit_price: Decimal
    quantity: int

    @property
    def amount(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class PricedCart:
    lines: Tuple[PricedLine, ...]
    shipping_cost: Decimal
    dropped: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def subtotal(self) -> Decimal:
        return quantize(sum((line.amount for line in self.lines), Decimal("0")))

    @property
    def total(self) -> Decimal:
        return quantize(self.subtotal + self.shipping_cost)


def price_cart(
    cart: Iterable[CartItem],
    products_by_id: Mapping[int, Dict[str, Any]],
    shipping_cost: Any,
) -> PricedCart:
    lines: List[PricedLine] = []
    dropped: List[int] = []
    for item in cart:
        product = products_by_id.get(item.product_id)
        if not product:
            dropped.append(item.product_id)
            continue
        lines.append(PricedLine(
            product_id=item.product_id,
            label=product.get("label") or "",
            unit_price=quantize(product.get("price")),
            quantity=item.quantity,
        ))
    return PricedCart(lines=tuple(lines), shipping_cost=quantize(shipping_cost), dropped=tuple(dropped))
