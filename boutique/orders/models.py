# module boutique.orders.models
"""Commande liée à une session Stripe Checkout: pending -> paid."""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
import json

from pydantic import BaseModel, ConfigDict


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class Order(BaseModel):
    model_config = ConfigDict(extra="ignore")

    stripe_session_id: str
    items_json: str = "[]"
    total: float = 0.0
    currency: str = "EUR"
    status: OrderStatus = OrderStatus.PENDING
    customer_email: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def items(self) -> List[Dict[str, Any]]:
        """Panier tel que soumis par le client (audit)."""
        try:
            data = json.loads(self.items_json or "[]")
        except ValueError:
            return []
        return data if isinstance(data, list) else []

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Order":
        return cls.model_validate(row)
