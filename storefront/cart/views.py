# module storefront.cart.views

"""Endpoints du panier et du checkout.
- /mount: hydrate un panier client (ids -> produits affichables).
- /shipping: estimation de livraison par code postal (forfait).
- /finish: crée la commande 'pending' et renvoie l'URL de paiement Stripe (authentifié, rate-limité).
Chaque entrée est validée (safe_parse) avant toute logique métier.
"""
from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from storefront.app_setup.dependencies import get_catalog_service, get_order_service
from storefront.cart.models import CartMountPayload, FinishPayload, ShippingQuery
from storefront.catalog.service import CatalogService
from storefront.errors import ValidationError
from storefront.orders.service import OrderService
from storefront.orders.shipping import flat_rate_quote
from storefront.utils.money import to_json_number
from storefront.utils.rate_limit import optional_rate_limit
from storefront.utils.security import AuthContext, require_user
from storefront.utils.validation import read_json, safe_parse

router = APIRouter(prefix="/api/v1/cart", tags=["Cart API"])


@router.post("/mount")
async def cart_mount(request: Request, catalog: CatalogService = Depends(get_catalog_service)):
    result = safe_parse(CartMountPayload, await read_json(request))
    if not result.success:
        raise ValidationError("Invalid array of ids")

    products = await run_in_threadpool(catalog.mount_cart, result.data.ids)
    return {"error": None, "products": products}


@router.get("/shipping")
def calculate_shipping(request: Request):
    """Frais de port forfaitaires: le code postal est seulement validé."""
    result = safe_parse(ShippingQuery, dict(request.query_params))
    if not result.success:
        raise ValidationError("Invalid ZIP Code")

    quote = flat_rate_quote(result.data.zipcode)
    return {"error": None, "zipcode": result.data.zipcode, "cost": to_json_number(quote.cost), "days": quote.days}


@router.post("/finish", status_code=201, dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def finish(
    request: Request,
    auth: AuthContext = Depends(require_user),
    orders: OrderService = Depends(get_order_service),
):
    """Finalise le panier.
    Étapes (déléguées à OrderService.assemble_order):
    - vérifie que l'adresse appartient à l'utilisateur (400 Invalid address)
    - tarifie le panier, persiste commande + lignes en une transaction
    - demande le lien Stripe (400 si aucune URL, la commande reste 'pending')
    """
    result = safe_parse(FinishPayload, await read_json(request))
    if not result.success:
        raise ValidationError("Invalid cart")

    payload = result.data
    url = await run_in_threadpool(
        orders.assemble_order, auth.user_id, payload.to_cart(), payload.address_id, flat_rate_quote()
    )
    return {"error": None, "url": url}
