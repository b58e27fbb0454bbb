"""Estimation de livraison: forfait configuré (pas de calcul par distance)."""
from dataclasses import dataclass
from decimal import Decimal

from storefront.config import SHIPPING_FLAT_COST, SHIPPING_FLAT_DAYS


@dataclass(frozen=True)
class ShippingQuote:
    cost: Decimal
    days: int


def flat_rate_quote(zipcode: str | None = None) -> ShippingQuote:
    # Le code postal est validé en amont; il n'influence pas encore le tarif
    return ShippingQuote(cost=Decimal(SHIPPING_FLAT_COST), days=SHIPPING_FLAT_DAYS)
