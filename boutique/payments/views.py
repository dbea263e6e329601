import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse

from boutique.catalog.repository import ProductRepository, get_product_repository
from boutique.config import Settings, get_settings
from boutique.errors import WebhookError
from boutique.orders.repository import OrderRepository, get_order_repository
from boutique.payments import service as payments_service
from boutique.payments.gateway import PaymentGateway
from boutique.utils.rate_limit import optional_rate_limit
from boutique.utils.templates import templates

logger = logging.getLogger(__name__)

web_router = APIRouter(tags=["Boutique"])
api_router = APIRouter(prefix="/api", tags=["Payments API"])
webhook_router = APIRouter(tags=["Webhook"])


def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.gateway


# module boutique.payments.views
@web_router.get("/config")
def public_config(settings: Settings = Depends(get_settings)):
    """Clé publique Stripe + devise pour le front (aucune authentification)."""
    return {"publishableKey": settings.stripe_publishable_key, "currency": settings.currency}


@web_router.get("/cart", response_class=HTMLResponse)
def cart_page(request: Request):
    # Le panier vit côté client (localStorage)
    return templates.TemplateResponse(request, "cart.html", {})


@web_router.get("/success", response_class=HTMLResponse)
def success_page(request: Request, session_id: str = ""):
    return templates.TemplateResponse(request, "success.html", {"session_id": session_id})


@api_router.post("/checkout", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_checkout(
    request: Request,
    settings: Settings = Depends(get_settings),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    products: ProductRepository = Depends(get_product_repository),
    orders: OrderRepository = Depends(get_order_repository),
):
    """
    Crée une session Stripe Checkout pour le panier envoyé.
    - Entrée JSON: { "items": [ { "sku": "<sku>", "qty": <int> }, ... ] }
    - Les prix éventuellement envoyés par le client sont ignorés
    - Réponse: { "sessionId": "...", "url": "..." }
    - Erreurs: 400 panier vide / produits introuvables, 500 Stripe non configuré / échec
    """
    try:
        body: Dict[str, Any] = await request.json()
    except ValueError:
        body = {}
    items = body.get("items") if isinstance(body, dict) else None
    session = payments_service.create_checkout_session(
        items if isinstance(items, list) else [],
        settings=settings,
        gateway=gateway,
        products=products,
        orders=orders,
    )
    return JSONResponse({"sessionId": session.session_id, "url": session.url})


@webhook_router.post("/webhook", include_in_schema=False)
async def stripe_webhook(
    request: Request,
    gateway: PaymentGateway = Depends(get_payment_gateway),
    orders: OrderRepository = Depends(get_order_repository),
):
    """
    Webhook Stripe: consomme checkout.session.completed pour passer la commande en 'paid'.
    - Body lu brut (aucun parsing avant vérification de signature)
    - Réponses: {"received": true} ou 400 {"error": "Webhook Error: ..."}
    """
    payload = await request.body()
    signature = request.headers.get("stripe-signature")
    try:
        payments_service.handle_webhook(payload, signature, gateway=gateway, orders=orders)
    except WebhookError as e:
        logger.warning("Webhook Error: %s", e.message)
        return JSONResponse({"error": f"Webhook Error: {e.message}"}, status_code=400)
    return JSONResponse({"received": True})
