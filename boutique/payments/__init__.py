"""
Module 'payments' (feature-first): point d'entrée public.
Réunit logique panier, contrat prestataire, adaptateur Stripe et cas d'usage.
"""

from .cart import CartLine, parse_cart_line, parse_quantity, to_minor_units, to_line_items, total_minor
from .gateway import PaymentGateway, SessionLine, SessionRef, SessionRequest, WebhookEvent
from .stripe_client import StripeGateway
from .service import CheckoutSession, create_checkout_session, handle_webhook

__all__ = [
    # cart
    "CartLine",
    "parse_cart_line",
    "parse_quantity",
    "to_minor_units",
    "to_line_items",
    "total_minor",
    # gateway
    "PaymentGateway",
    "SessionLine",
    "SessionRef",
    "SessionRequest",
    "WebhookEvent",
    "StripeGateway",
    # services
    "CheckoutSession",
    "create_checkout_session",
    "handle_webhook",
]
