# module boutique.admin.service
"""Validation des formulaires produit et écriture via le repository catalogue."""
from typing import Any, Mapping, Optional
import logging
import math

from boutique.catalog.models import Gender, Product, ProductInput
from boutique.catalog.repository import ProductRepository
from boutique.errors import InvalidProductForm

logger = logging.getLogger(__name__)

DEFAULT_PRICE = 49.90
DEFAULT_SIZE = "70 ml"


def _field(form: Mapping[str, Any], name: str) -> str:
    value = form.get(name)
    return value.strip() if isinstance(value, str) else ""


def parse_product_form(
    form: Mapping[str, Any],
    uploaded_image: Optional[str] = None,
    *,
    sku: Optional[str] = None,
) -> ProductInput:
    """
    Formulaire admin -> ProductInput.
    - sku et nom requis; genre inconnu -> Unisexe; prix 49.90 et taille '70 ml' par défaut
    - l'image téléversée remplace le champ texte 'image'
    - en édition, le SKU stocké est imposé: il ne change jamais après création
    - InvalidProductForm si un champ est invalide
    """
    sku = sku or _field(form, "sku")
    name = _field(form, "name")
    if not sku or not name:
        raise InvalidProductForm("SKU et nom requis")

    price_raw = _field(form, "price").replace(",", ".")
    try:
        price = float(price_raw) if price_raw else DEFAULT_PRICE
    except ValueError:
        raise InvalidProductForm("Prix invalide")
    if price < 0 or not math.isfinite(price):
        raise InvalidProductForm("Prix invalide")

    return ProductInput(
        sku=sku,
        name=name,
        gender=Gender.parse(_field(form, "gender") or Gender.UNISEXE.value),
        price=price,
        image=uploaded_image or _field(form, "image"),
        default_size=_field(form, "default_size") or DEFAULT_SIZE,
    )


def create_product(products: ProductRepository, data: ProductInput) -> Optional[Product]:
    created = products.create(data)
    logger.info("admin.create_product sku=%s", data.sku)
    return created


def update_product(products: ProductRepository, product_id: int, data: ProductInput) -> Optional[Product]:
    updated = products.update(product_id, data)
    logger.info("admin.update_product id=%s sku=%s", product_id, data.sku)
    return updated
