"""
Arithmétique monétaire (Decimal) partagée par la tarification et les line items Stripe.
- Les montants de la base (numeric) arrivent en str/float/int: on passe par str() pour éviter
  les artefacts binaires (89.9 -> Decimal("89.9") et non 89.900000000000005684...).
- Arrondi unique au centime, demi vers le haut, comme round(price * 100) côté paiement.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

CENT = Decimal("0.01")

def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")

def quantize(amount: Any) -> Decimal:
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)

def to_minor_units(amount: Any) -> int:
    """Montant -> centimes entiers (unit_amount Stripe)."""
    return int((to_decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def format_amount(amount: Any) -> str:
    # Format texte envoyé à Postgres pour les colonnes numeric
    return f"{quantize(amount):.2f}"

def to_json_number(amount: Any) -> int | float:
    """Montant pour une réponse JSON: entier si sans centimes (10), sinon float (10.5)."""
    value = quantize(amount)
    return int(value) if value == value.to_integral_value() else float(value)
