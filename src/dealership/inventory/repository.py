from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Classification, InventoryItem


class InventoryRepository(Protocol):
    def list_classifications(self) -> Sequence[Classification]:
        raise NotImplementedError

    def get_classification(self, classification_id: int) -> Optional[Classification]:
        raise NotImplementedError

    def get_classification_by_name(self, name: str) -> Optional[Classification]:
        """Case-insensitive lookup."""
        raise NotImplementedError

    def create_classification(self, *, name: str) -> int:
        """Raises ConflictError when the name is already taken."""
        raise NotImplementedError

    def list_by_classification_name(self, name: str) -> Sequence[InventoryItem]:
        raise NotImplementedError

    def get_item(self, inv_id: int) -> Optional[InventoryItem]:
        raise NotImplementedError

    def create_item(self, **fields) -> int:
        raise NotImplementedError

    def update_item(self, inv_id: int, **fields) -> bool:
        raise NotImplementedError

    def list_image_paths(self) -> Sequence[tuple[int, str, str]]:
        """(inv_id, inv_image, inv_thumbnail) for every item."""
        raise NotImplementedError

    def set_image_paths(self, *, inv_id: int, inv_image: str, inv_thumbnail: str) -> bool:
        raise NotImplementedError
