"""
Accès aux données pour la feature 'orders' (table 'orders').
"""
from typing import Any, Callable, Dict, List, Optional
import json
import logging

from fastapi import Request
from supabase import Client

from boutique.errors import StorageError
from boutique.orders.models import Order, OrderStatus

logger = logging.getLogger(__name__)

TABLE = "orders"


# module boutique.orders.repository
class OrderRepository:
    def __init__(self, client: Callable[[], Client]):
        self._client = client

    def insert_pending(
        self,
        *,
        session_id: str,
        items: List[Dict[str, Any]],
        total: float,
        currency: str,
    ) -> None:
        """
        Insert idempotent d'une commande 'pending' (clé stripe_session_id).
        - Une ligne existante pour la même session n'est pas écrasée.
        - Soulève StorageError si l'écriture échoue.
        """
        row = {
            "stripe_session_id": session_id,
            "items_json": json.dumps(items),
            "total": total,
            "currency": currency,
            "status": OrderStatus.PENDING.value,
        }
        try:
            (
                self._client()
                .table(TABLE)
                .upsert(row, on_conflict="stripe_session_id", ignore_duplicates=True)
                .execute()
            )
        except Exception as e:
            logger.exception("orders.repository.insert_pending failed session_id=%s", session_id)
            raise StorageError(str(e)) from e

    def mark_paid(self, session_id: str, customer_email: Optional[str]) -> int:
        """
        Passe la commande en 'paid' et renseigne l'email client.
        Ré-appliquer la même mise à jour ne change pas l'état.
        Retourne le nombre de lignes touchées.
        """
        try:
            res = (
                self._client()
                .table(TABLE)
                .update({"status": OrderStatus.PAID.value, "customer_email": customer_email})
                .eq("stripe_session_id", session_id)
                .execute()
            )
        except Exception as e:
            logger.exception("orders.repository.mark_paid failed session_id=%s", session_id)
            raise StorageError(str(e)) from e
        return len(getattr(res, "data", None) or [])

    def get(self, session_id: str) -> Optional[Order]:
        if not session_id:
            return None
        try:
            res = self._client().table(TABLE).select("*").eq("stripe_session_id", session_id).limit(1).execute()
            rows = res.data or []
            return Order.from_row(rows[0]) if rows else None
        except Exception:
            logger.exception("orders.repository.get failed session_id=%s", session_id)
            return None

    def list_recent(self) -> List[Order]:
        try:
            res = self._client().table(TABLE).select("*").order("created_at", desc=True).execute()
            return [Order.from_row(r) for r in res.data or []]
        except Exception:
            logger.exception("orders.repository.list_recent failed")
            return []


def get_order_repository(request: Request) -> OrderRepository:
    """Dépendance FastAPI: repository commandes attaché à l'application."""
    return request.app.state.orders
