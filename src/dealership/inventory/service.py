from __future__ import annotations

import logging
from typing import Any, List, Mapping, Sequence

from ..core.constants import FALLBACK_CLASSIFICATIONS
from ..core.enums import Outcome
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.results import FlowResult
from .forms import sticky_item_values, validate_classification_name, validate_inventory_item
from .model import Classification, InventoryItem
from .repository import InventoryRepository

logger = logging.getLogger(__name__)

DUPLICATED_SEGMENT = "/vehicles/vehicles/"


def normalize_image_path(path: str) -> str:
    """Collapse repeated ``/vehicles/vehicles/`` segments left by old imports."""
    while DUPLICATED_SEGMENT in path:
        path = path.replace(DUPLICATED_SEGMENT, "/vehicles/")
    return path


class InventoryService:
    def __init__(self, inventory: InventoryRepository):
        self._inventory = inventory

    def list_classifications(self) -> Sequence[Classification]:
        return self._inventory.list_classifications()

    def navigation(self) -> List[str]:
        """Classification names for the nav bar; never fails a page render."""
        try:
            names: List[str] = []
            for c in self._inventory.list_classifications():
                if c.classification_name not in names:
                    names.append(c.classification_name)
            return names
        except Exception:
            logger.exception("Error building navigation, using fallback classifications")
            return list(FALLBACK_CLASSIFICATIONS)

    def list_by_classification(self, name: str) -> Sequence[InventoryItem]:
        return self._inventory.list_by_classification_name(name)

    def get_detail(self, inv_id: int) -> InventoryItem:
        item = self._inventory.get_item(int(inv_id))
        if item is None:
            raise NotFoundError("Vehicle Not Found")
        return item

    def add_classification(self, *, name: str) -> FlowResult:
        sticky = {"classification_name": (name or "").strip()}
        try:
            value = validate_classification_name(name)
        except ValidationError as e:
            return FlowResult(Outcome.VALIDATION_FAILED, notice=str(e), errors=e.errors, values=sticky)

        conflict = FlowResult(Outcome.CONFLICT, notice=f"Classification '{value}' already exists.", values=sticky)
        if self._inventory.get_classification_by_name(value):
            return conflict
        try:
            classification_id = self._inventory.create_classification(name=value)
        except ConflictError:
            return conflict

        logger.info("Added classification %s (%s)", value, classification_id)
        return FlowResult(
            Outcome.CREATED,
            notice=f'Classification "{value}" added successfully.',
            values=sticky,
            record=classification_id,
        )

    def add_inventory_item(self, form: Mapping[str, Any]) -> FlowResult:
        sticky = sticky_item_values(form)
        try:
            values = self._validated_item(sticky)
        except ValidationError as e:
            return FlowResult(Outcome.VALIDATION_FAILED, notice=str(e), errors=e.errors, values=sticky)

        inv_id = self._inventory.create_item(**values)
        logger.info("Added inventory item %s", inv_id)
        return FlowResult(
            Outcome.CREATED,
            notice=f'Vehicle "{values["inv_make"]} {values["inv_model"]}" added successfully.',
            values=sticky,
            record=inv_id,
        )

    def update_inventory_item(self, inv_id: int, form: Mapping[str, Any]) -> FlowResult:
        sticky = sticky_item_values(form)
        if self._inventory.get_item(int(inv_id)) is None:
            return FlowResult(Outcome.NOT_FOUND, notice="Vehicle Not Found", values=sticky)

        try:
            values = self._validated_item(sticky)
        except ValidationError as e:
            return FlowResult(Outcome.VALIDATION_FAILED, notice=str(e), errors=e.errors, values=sticky)

        self._inventory.update_item(int(inv_id), **values)
        logger.info("Updated inventory item %s", inv_id)
        return FlowResult(
            Outcome.UPDATED,
            notice=f'Vehicle "{values["inv_make"]} {values["inv_model"]}" was successfully updated.',
            values=sticky,
            record=int(inv_id),
        )

    def normalize_image_paths(self) -> int:
        changed = 0
        for inv_id, image, thumbnail in self._inventory.list_image_paths():
            new_image = normalize_image_path(image)
            new_thumbnail = normalize_image_path(thumbnail)
            if new_image != image or new_thumbnail != thumbnail:
                self._inventory.set_image_paths(inv_id=inv_id, inv_image=new_image, inv_thumbnail=new_thumbnail)
                logger.info("Updated image paths for vehicle %s", inv_id)
                changed += 1
        return changed

    def _validated_item(self, sticky: Mapping[str, Any]) -> dict:
        values = validate_inventory_item(sticky)
        if self._inventory.get_classification(values["classification_id"]) is None:
            raise ValidationError("Please fix the errors below.", ["Please choose a classification."])
        return values
