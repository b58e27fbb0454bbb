# module storefront.payments.views

"""Webhook Stripe.
Le body est lu brut (request.body()): la signature Stripe est calculée sur les octets exacts,
un body re-sérialisé serait rejeté.
"""

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from storefront.app_setup.dependencies import get_webhook_handler
from storefront.payments.service import WebhookHandler

router = APIRouter(tags=["Payments API"])

@router.post("/webhook/stripe", include_in_schema=False)
async def webhook_stripe(request: Request, handler: WebhookHandler = Depends(get_webhook_handler)):
    """
    - Signature invalide: 400 {"error": "Invalid webhook"}, aucune écriture.
    - Sinon: {"received": true, "outcome": "applied" | "noop" | "ignored"}.
    """
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")
    outcome = await run_in_threadpool(handler.handle, payload, sig_header)
    return {"received": True, "outcome": outcome}
