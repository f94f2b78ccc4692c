from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Classification:
    classification_id: int
    classification_name: str


@dataclass(frozen=True)
class InventoryItem:
    inv_id: int
    inv_make: str
    inv_model: str
    inv_year: int
    inv_description: str
    inv_image: str
    inv_thumbnail: str
    inv_price: Decimal
    inv_miles: int
    inv_color: str
    classification_id: int
    classification_name: Optional[str] = None

    @property
    def title(self) -> str:
        return f"{self.inv_make} {self.inv_model}"
