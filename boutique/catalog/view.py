"""
Construction de la vue catalogue (filtre + tri), sans accès base.
"""
import unicodedata
from typing import Iterable, List

from boutique.catalog.models import ALL_GENDERS, Product, SortKey


def collation_key(text: str) -> str:
    """Clé de comparaison « locale »: sans accents, insensible à la casse."""
    decomposed = unicodedata.normalize("NFKD", text or "")
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def matches_query(product: Product, q: str) -> bool:
    """q déjà normalisé (trim + minuscules): nom contient q, ou SKU égal à q."""
    return q in (product.name or "").lower() or (product.sku or "").lower() == q


def build_catalog_view(
    products: Iterable[Product],
    q: str = "",
    gender: str = ALL_GENDERS,
    sort: str = SortKey.NAME_ASC.value,
) -> List[Product]:
    """
    Applique dans l'ordre:
      1) recherche texte q (sous-chaîne du nom ou SKU exact, sans casse)
      2) filtre genre exact, sauf sentinelle « Tous »
      3) re-tri stable selon la clé demandée (prix numérique, absent = 0)
    Une clé de tri inconnue conserve l'ordre par nom croissant.
    """
    rows = sorted(products, key=lambda p: p.name or "")

    q = (q or "").strip().lower()
    if q:
        rows = [p for p in rows if matches_query(p, q)]

    gender = gender or ALL_GENDERS
    if gender != ALL_GENDERS:
        rows = [p for p in rows if p.gender.value == gender]

    key = SortKey.parse(sort)
    if key is SortKey.NAME_DESC:
        rows = sorted(rows, key=lambda p: collation_key(p.name), reverse=True)
    elif key is SortKey.PRICE_ASC:
        rows = sorted(rows, key=lambda p: p.sort_price)
    elif key is SortKey.PRICE_DESC:
        rows = sorted(rows, key=lambda p: p.sort_price, reverse=True)
    return rows
