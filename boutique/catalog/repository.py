"""
Accès aux données pour la feature 'catalog' (table 'products').
"""
from datetime import datetime, timezone
from typing import Callable, List, Optional
import logging

from fastapi import Request
from supabase import Client

from boutique.catalog.models import Product, ProductInput
from boutique.errors import StorageError

logger = logging.getLogger(__name__)

TABLE = "products"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# module boutique.catalog.repository
class ProductRepository:
    def __init__(self, client: Callable[[], Client]):
        self._client = client

    def list_by_name(self) -> List[Product]:
        """Tous les produits, triés par nom croissant (vue catalogue)."""
        try:
            res = self._client().table(TABLE).select("*").order("name", desc=False).execute()
            return [Product.from_row(r) for r in res.data or []]
        except Exception as e:
            logger.exception("catalog.repository.list_by_name failed")
            raise StorageError("Catalogue indisponible") from e

    def list_recent(self) -> List[Product]:
        """Tous les produits, derniers modifiés en premier (liste admin)."""
        try:
            res = self._client().table(TABLE).select("*").order("updated_at", desc=True).execute()
            return [Product.from_row(r) for r in res.data or []]
        except Exception:
            logger.exception("catalog.repository.list_recent failed")
            return []

    def get_by_sku(self, sku: str) -> Optional[Product]:
        if not sku:
            return None
        try:
            res = self._client().table(TABLE).select("*").eq("sku", sku).limit(1).execute()
            rows = res.data or []
            return Product.from_row(rows[0]) if rows else None
        except Exception as e:
            logger.exception("catalog.repository.get_by_sku failed sku=%s", sku)
            raise StorageError("Lecture produit impossible") from e

    def get_by_id(self, product_id: int) -> Optional[Product]:
        try:
            res = self._client().table(TABLE).select("*").eq("id", product_id).limit(1).execute()
            rows = res.data or []
            return Product.from_row(rows[0]) if rows else None
        except Exception as e:
            logger.exception("catalog.repository.get_by_id failed id=%s", product_id)
            raise StorageError("Lecture produit impossible") from e

    def create(self, data: ProductInput) -> Optional[Product]:
        row = data.to_row()
        row["updated_at"] = _now_iso()
        try:
            res = self._client().table(TABLE).insert(row).execute()
        except Exception as e:
            logger.exception("catalog.repository.create failed sku=%s", data.sku)
            raise StorageError(str(e)) from e
        rows = getattr(res, "data", None) or []
        return Product.from_row(rows[0]) if rows else None

    def update(self, product_id: int, data: ProductInput) -> Optional[Product]:
        row = data.to_row()
        row["updated_at"] = _now_iso()
        try:
            res = self._client().table(TABLE).update(row).eq("id", product_id).execute()
        except Exception as e:
            logger.exception("catalog.repository.update failed id=%s", product_id)
            raise StorageError(str(e)) from e
        rows = getattr(res, "data", None) or []
        return Product.from_row(rows[0]) if rows else None

    def delete(self, product_id: int) -> bool:
        try:
            self._client().table(TABLE).delete().eq("id", product_id).execute()
            return True
        except Exception:
            logger.exception("catalog.repository.delete failed id=%s", product_id)
            return False


def get_product_repository(request: Request) -> ProductRepository:
    """Dépendance FastAPI: repository produits attaché à l'application."""
    return request.app.state.products
