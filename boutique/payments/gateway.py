"""
Contrat minimal du prestataire de paiement.
Le service checkout/webhook ne dépend que de ce Protocol; l'adaptateur Stripe
(boutique.payments.stripe_client) l'implémente, les tests utilisent un faux.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


@dataclass(frozen=True)
class SessionLine:
    """Instantané de prix facturé par le prestataire pour une ligne."""

    sku: str
    name: str
    quantity: int
    unit_amount: int
    currency: str


@dataclass(frozen=True)
class SessionRequest:
    lines: List[SessionLine]
    success_url: str
    cancel_url: str
    allowed_countries: List[str]


@dataclass(frozen=True)
class SessionRef:
    id: str
    url: Optional[str] = None


@dataclass(frozen=True)
class WebhookEvent:
    type: str
    data_object: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "WebhookEvent":
        if not isinstance(payload, dict):
            raise ValueError("event must be a JSON object")
        data = payload.get("data") or {}
        obj = data.get("object") if isinstance(data, dict) else None
        return cls(type=str(payload.get("type") or ""), data_object=obj if isinstance(obj, dict) else {})


class PaymentGateway(Protocol):
    @property
    def configured(self) -> bool: ...

    def create_payment_session(self, request: SessionRequest) -> SessionRef: ...

    def verify_and_decode_event(self, raw: bytes, signature: Optional[str]) -> WebhookEvent: ...
