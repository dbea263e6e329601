"""
Logique panier pure (pas de Stripe, pas de DB).
"""
from dataclasses import dataclass
from typing import Any, Dict, List
import math

from boutique.catalog.models import Product
from boutique.payments.gateway import SessionLine


# module boutique.payments.cart
@dataclass(frozen=True)
class CartLine:
    sku: str
    qty: int


def parse_quantity(raw: Any) -> int:
    """
    Quantité entière, 1 par défaut, jamais inférieure à 1.
    - Accepte int/float/str ("2", "2.7" -> 2); valeur illisible -> 1
    """
    if raw is None or raw == "":
        return 1
    try:
        qty = int(float(raw))
    except (TypeError, ValueError, OverflowError):
        return 1
    return max(1, qty)


def parse_cart_line(item: Any) -> CartLine:
    """Ligne brute {sku, qty} -> CartLine; les autres champs (ex: price) sont ignorés."""
    if not isinstance(item, dict):
        return CartLine(sku="", qty=1)
    return CartLine(sku=str(item.get("sku") or "").strip(), qty=parse_quantity(item.get("qty")))


def to_minor_units(price: float | None) -> int:
    """Prix unitaire en centimes, arrondi au demi supérieur."""
    return int(math.floor(float(price or 0) * 100 + 0.5))


def to_session_line(product: Product, qty: int, currency: str) -> SessionLine:
    return SessionLine(
        sku=product.sku,
        name=product.name or product.sku,
        quantity=qty,
        unit_amount=to_minor_units(product.price),
        currency=currency.lower(),
    )


def to_line_items(lines: List[SessionLine]) -> List[Dict[str, Any]]:
    """
    Construit les line_items Stripe (price_data) à partir des instantanés de prix.
    - unit_amount en centimes, SKU transmis en metadata produit.
    """
    return [
        {
            "quantity": line.quantity,
            "price_data": {
                "currency": line.currency,
                "unit_amount": line.unit_amount,
                "product_data": {"name": line.name, "metadata": {"sku": line.sku}},
            },
        }
        for line in lines
    ]


def total_minor(lines: List[SessionLine]) -> int:
    return sum(line.unit_amount * line.quantity for line in lines)
