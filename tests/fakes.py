"""
Doublures en mémoire pour les tests: repositories et prestataire de paiement.
Même contrat que les implémentations Supabase / Stripe.
"""
import json
from datetime import datetime, timezone
from typing import Dict, List, Optional

from boutique.catalog.models import Product, ProductInput
from boutique.errors import InvalidSignature, MalformedEvent, ProviderUnavailable, StorageError
from boutique.orders.models import Order, OrderStatus
from boutique.payments.gateway import SessionRef, SessionRequest, WebhookEvent

GOOD_SIGNATURE = "t=1,v1=good"


class FakeProductRepository:
    """Repository produits en mémoire (même contrat que ProductRepository)."""

    def __init__(self, products: Optional[List[Product]] = None):
        self._rows: Dict[int, Product] = {}
        self._next_id = 1
        for p in products or []:
            self._store(p)
        self.fail_writes = False

    def _store(self, p: Product) -> Product:
        if p.id is None:
            p = p.model_copy(update={"id": self._next_id})
        self._next_id = max(self._next_id, p.id + 1)
        self._rows[p.id] = p
        return p

    def list_by_name(self) -> List[Product]:
        return sorted(self._rows.values(), key=lambda p: p.name)

    def list_recent(self) -> List[Product]:
        return sorted(self._rows.values(), key=lambda p: p.updated_at or datetime.min.replace(tzinfo=timezone.utc), reverse=True)

    def get_by_sku(self, sku: str) -> Optional[Product]:
        return next((p for p in self._rows.values() if p.sku == sku), None)

    def get_by_id(self, product_id: int) -> Optional[Product]:
        return self._rows.get(product_id)

    def _check_write(self):
        if self.fail_writes:
            raise StorageError("duplicate key value violates unique constraint")

    def create(self, data: ProductInput) -> Product:
        self._check_write()
        return self._store(Product(**data.model_dump(), updated_at=datetime.now(timezone.utc)))

    def update(self, product_id: int, data: ProductInput) -> Optional[Product]:
        self._check_write()
        if product_id not in self._rows:
            return None
        p = Product(id=product_id, **data.model_dump(), updated_at=datetime.now(timezone.utc))
        self._rows[product_id] = p
        return p

    def delete(self, product_id: int) -> bool:
        if self.fail_writes:
            return False
        self._rows.pop(product_id, None)
        return True


class FakeOrderRepository:
    """Repository commandes en mémoire; insert idempotent sur la session."""

    def __init__(self):
        self.rows: Dict[str, Order] = {}
        self.mark_paid_calls = 0

    def insert_pending(self, *, session_id, items, total, currency) -> None:
        if session_id in self.rows:
            return
        self.rows[session_id] = Order(
            stripe_session_id=session_id,
            items_json=json.dumps(items),
            total=total,
            currency=currency,
            status=OrderStatus.PENDING,
            created_at=datetime.now(timezone.utc),
        )

    def mark_paid(self, session_id, customer_email) -> int:
        self.mark_paid_calls += 1
        order = self.rows.get(session_id)
        if not order:
            return 0
        self.rows[session_id] = order.model_copy(update={"status": OrderStatus.PAID, "customer_email": customer_email})
        return 1

    def get(self, session_id) -> Optional[Order]:
        return self.rows.get(session_id)

    def list_recent(self) -> List[Order]:
        return list(reversed(list(self.rows.values())))


class FakeGateway:
    """
    Prestataire de paiement factice.
    - Sessions numérotées cs_test_1, cs_test_2...
    - Signature acceptée uniquement si égale à GOOD_SIGNATURE
    """

    def __init__(self, configured: bool = True, fail: bool = False):
        self._configured = configured
        self.fail = fail
        self.requests: List[SessionRequest] = []

    @property
    def configured(self) -> bool:
        return self._configured

    def create_payment_session(self, request: SessionRequest) -> SessionRef:
        if not self._configured:
            raise ProviderUnavailable()
        if self.fail:
            raise RuntimeError("provider down")
        self.requests.append(request)
        sid = f"cs_test_{len(self.requests)}"
        return SessionRef(id=sid, url=f"https://checkout.stripe.test/pay/{sid}")

    def verify_and_decode_event(self, raw: bytes, signature: Optional[str]) -> WebhookEvent:
        if signature != GOOD_SIGNATURE:
            raise InvalidSignature("No signatures found matching the expected signature for payload")
        try:
            return WebhookEvent.from_payload(json.loads(raw))
        except ValueError as e:
            raise MalformedEvent(str(e)) from e


def make_product(sku: str, name: str, price: Optional[float], gender: str = "Unisexe", **kw) -> Product:
    return Product(sku=sku, name=name, price=price, gender=gender, **kw)

