"""
Adaptateur Stripe: centralise les appels Stripe (Checkout + vérification webhook).
La clé API est passée à chaque appel, sans toucher à stripe.api_key global.
"""
from typing import Optional
import json
import logging

import stripe

from boutique.config import Settings
from boutique.errors import InvalidSignature, MalformedEvent, ProviderUnavailable
from boutique.payments.cart import to_line_items
from boutique.payments.gateway import SessionRef, SessionRequest, WebhookEvent

logger = logging.getLogger(__name__)


# module boutique.payments.stripe_client
class StripeGateway:
    def __init__(self, secret_key: str = "", webhook_secret: str = ""):
        self._secret_key = secret_key
        self._webhook_secret = webhook_secret

    @classmethod
    def from_settings(cls, settings: Settings) -> "StripeGateway":
        return cls(settings.stripe_secret_key, settings.stripe_webhook_secret)

    @property
    def configured(self) -> bool:
        return bool(self._secret_key)

    def create_payment_session(self, request: SessionRequest) -> SessionRef:
        """
        Crée une session Stripe Checkout (mode paiement).
        - success_url contient le placeholder {CHECKOUT_SESSION_ID}
        - codes promo autorisés, adresse de facturation auto, livraison restreinte
        Retour: SessionRef(id, url)
        """
        if not self.configured:
            raise ProviderUnavailable()
        session = stripe.checkout.Session.create(
            api_key=self._secret_key,
            mode="payment",
            line_items=to_line_items(request.lines),
            success_url=request.success_url,
            cancel_url=request.cancel_url,
            allow_promotion_codes=True,
            billing_address_collection="auto",
            shipping_address_collection={"allowed_countries": list(request.allowed_countries)},
        )
        return SessionRef(id=session.id, url=getattr(session, "url", None))

    def verify_and_decode_event(self, raw: bytes, signature: Optional[str]) -> WebhookEvent:
        """
        Valide et décode un événement webhook à partir du body brut.
        - Secret configuré: vérifie l'en-tête Stripe-Signature (HMAC + tolérance)
        - Pas de secret: décodage JSON direct (dev, non sécurisé)
        """
        try:
            payload = raw.decode("utf-8") if isinstance(raw, bytes) else str(raw or "")
        except UnicodeDecodeError as e:
            raise MalformedEvent(f"Payload invalide: {e}") from e
        if self._webhook_secret:
            if not signature:
                raise InvalidSignature("En-tête Stripe-Signature manquant")
            try:
                stripe.WebhookSignature.verify_header(
                    payload, signature, self._webhook_secret, stripe.Webhook.DEFAULT_TOLERANCE
                )
            except stripe.SignatureVerificationError as e:
                raise InvalidSignature(str(e)) from e
        try:
            return WebhookEvent.from_payload(json.loads(payload))
        except ValueError as e:
            raise MalformedEvent(f"Payload invalide: {e}") from e
