# module boutique.catalog.models
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

ALL_GENDERS = "Tous"


class Gender(str, Enum):
    HOMME = "Homme"
    FEMME = "Femme"
    UNISEXE = "Unisexe"

    @classmethod
    def parse(cls, value: Any) -> "Gender":
        """Valeur vide ou inconnue -> Unisexe."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip())
        except ValueError:
            return cls.UNISEXE


class SortKey(str, Enum):
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"

    @classmethod
    def parse(cls, value: Any) -> "SortKey":
        """Clé inconnue -> name-asc (ordre déjà appliqué au chargement)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip())
        except ValueError:
            return cls.NAME_ASC


class Product(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    sku: str
    name: str = ""
    gender: Gender = Gender.UNISEXE
    price: Optional[float] = None
    image: Optional[str] = None
    default_size: str = "70 ml"
    updated_at: Optional[datetime] = None

    @field_validator("gender", mode="before")
    @classmethod
    def _fallback_gender(cls, v):
        return Gender.parse(v)

    @field_validator("name", "default_size", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    @property
    def sort_price(self) -> float:
        return float(self.price or 0)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Product":
        return cls.model_validate(row)


class ProductInput(BaseModel):
    """Données validées d'un formulaire admin (création / édition)."""

    sku: str
    name: str
    gender: Gender = Gender.UNISEXE
    price: float = 49.90
    image: str = ""
    default_size: str = "70 ml"

    def to_row(self) -> Dict[str, Any]:
        row = self.model_dump()
        row["gender"] = self.gender.value
        return row
