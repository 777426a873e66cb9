"""Pets collection store."""

from typing import Any

from ..errors import ValidationError
from ..logging_config import log_user_action
from ..models.pet import Pet, PetDraft
from ..services.auth import require_owner
from ..storage import PETS_KEY
from .base import CollectionStore


class PetStore(CollectionStore[Pet]):
    """CRUD over the pets shown on the pets page."""

    key = PETS_KEY
    entity_name = "pet"
    patchable_fields = frozenset({"name", "breed", "description", "fun_facts", "image"})

    def _from_dict(self, data: dict[str, Any]) -> Pet:
        return Pet.from_dict(data)

    def _validate(self, item: Pet) -> None:
        missing = item.missing_fields()
        if missing:
            raise ValidationError(
                f"Pet is missing required fields: {', '.join(missing)}",
                code="pet_incomplete",
                details={"missing_fields": missing},
            )

    def _coerce_patch(self, patch: dict[str, Any]) -> dict[str, Any]:
        if "fun_facts" in patch:
            patch["fun_facts"] = list(patch["fun_facts"])
        if "image" in patch:
            patch["image"] = patch["image"] or None
        return patch

    def create(self, draft: PetDraft, authorized: bool) -> Pet:
        """
        Commit a draft as a new pet with a fresh id.

        Raises:
            PermissionDeniedError: Without the owner capability
            ValidationError: If the draft is incomplete
        """
        return self._insert(draft.to_pet(), authorized)

    def save_draft(self, pet_id: str, draft: PetDraft, authorized: bool) -> Pet:
        """Commit an edit draft over the existing pet ``pet_id``."""
        return self.update(
            pet_id,
            {
                "name": draft.name,
                "breed": draft.breed,
                "description": draft.description,
                "fun_facts": draft.fun_facts,
                "image": draft.image,
            },
            authorized,
        )

    def duplicate(self, pet_id: str, authorized: bool) -> Pet:
        """
        Append a copy of a pet with a fresh id and a " (Copy)" name.

        Raises:
            PermissionDeniedError: Without the owner capability
            EntityNotFoundError: If no pet has ``pet_id``
        """
        require_owner(authorized, "duplicate pet")
        copy = self.get(pet_id).duplicate()
        self._commit([*self._items, copy])
        log_user_action("pet_duplicated", source_id=pet_id, id=copy.id)
        return copy
