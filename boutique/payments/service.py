"""
Cas d'usage 'payments': orchestre catalogue, panier, prestataire et commandes.
- create_checkout_session: panier -> session prestataire + commande 'pending'
- handle_webhook: événement signé -> commande 'paid'
"""
from dataclasses import dataclass
from typing import Any, List, Optional
import logging

from boutique.catalog.repository import ProductRepository
from boutique.config import Settings
from boutique.errors import (
    BoutiqueError,
    CheckoutFailed,
    EmptyCart,
    MalformedEvent,
    NoValidProducts,
    ProviderUnavailable,
)
from boutique.orders.repository import OrderRepository
from boutique.payments import cart as cart_logic
from boutique.payments.gateway import (
    CHECKOUT_SESSION_COMPLETED,
    PaymentGateway,
    SessionLine,
    SessionRequest,
    WebhookEvent,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutSession:
    session_id: str
    url: Optional[str]
    total_minor: int


def resolve_lines(items: List[Any], products: ProductRepository, currency: str) -> List[SessionLine]:
    """
    Résout chaque ligne du panier avec le prix serveur.
    Les SKU inconnus sont ignorés sans erreur.
    """
    lines: List[SessionLine] = []
    for raw in items:
        line = cart_logic.parse_cart_line(raw)
        product = products.get_by_sku(line.sku) if line.sku else None
        if not product:
            continue
        lines.append(cart_logic.to_session_line(product, line.qty, currency))
    return lines


def build_session_request(lines: List[SessionLine], settings: Settings) -> SessionRequest:
    base = settings.public_base_url
    return SessionRequest(
        lines=lines,
        success_url=f"{base}/success?session_id={{CHECKOUT_SESSION_ID}}",
        cancel_url=f"{base}/cart",
        allowed_countries=list(settings.shipping_countries),
    )


def create_checkout_session(
    items: Any,
    *,
    settings: Settings,
    gateway: PaymentGateway,
    products: ProductRepository,
    orders: OrderRepository,
) -> CheckoutSession:
    """
    Crée la session de paiement et enregistre la commande 'pending'.
    - ProviderUnavailable si Stripe n'est pas configuré (vérifié à chaque appel)
    - EmptyCart si le panier est vide, NoValidProducts si aucun SKU n'est résolu
    - Toute autre erreur (prestataire, base) -> CheckoutFailed
    Le total est toujours recalculé à partir des prix du catalogue.
    """
    if not gateway.configured:
        raise ProviderUnavailable()
    if not isinstance(items, list) or not items:
        raise EmptyCart()

    try:
        lines = resolve_lines(items, products, settings.currency)
        if not lines:
            raise NoValidProducts()
        total = cart_logic.total_minor(lines)

        session = gateway.create_payment_session(build_session_request(lines, settings))
        # Pas de transaction: une session peut exister sans commande si l'insert échoue
        orders.insert_pending(
            session_id=session.id,
            items=items,
            total=total / 100.0,
            currency=settings.currency,
        )
    except BoutiqueError as e:
        if e.status_code < 500:
            raise
        logger.exception("payments.service.create_checkout_session failed")
        raise CheckoutFailed() from e
    except Exception as e:
        logger.exception("payments.service.create_checkout_session failed")
        raise CheckoutFailed() from e

    logger.info("payments.checkout session_id=%s lines=%s total_minor=%s", session.id, len(lines), total)
    return CheckoutSession(session_id=session.id, url=session.url, total_minor=total)


def extract_completed_session(event: WebhookEvent) -> tuple[str, Optional[str]]:
    """(session_id, email) depuis data.object d'un checkout.session.completed."""
    obj = event.data_object
    session_id = str(obj.get("id") or "")
    if not session_id:
        raise MalformedEvent("Session sans identifiant")
    details = obj.get("customer_details") or {}
    email = details.get("email") if isinstance(details, dict) else None
    return session_id, email or None


def handle_webhook(
    raw_body: bytes,
    signature: Optional[str],
    *,
    gateway: PaymentGateway,
    orders: OrderRepository,
) -> WebhookEvent:
    """
    Vérifie/décode l'événement puis applique la transition pending -> paid.
    - Les autres types d'événements sont acquittés sans effet
    - En cas d'erreur de signature/décodage, aucune commande n'est modifiée
    """
    event = gateway.verify_and_decode_event(raw_body, signature)
    if event.type == CHECKOUT_SESSION_COMPLETED:
        session_id, email = extract_completed_session(event)
        updated = orders.mark_paid(session_id, email)
        logger.info("payments.webhook paid session_id=%s updated=%s", session_id, updated)
    else:
        logger.info("payments.webhook ignored type=%s", event.type)
    return event
