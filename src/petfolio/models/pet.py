"""
Pet model for petfolio.

Pets are the main collection on the site. A PetDraft is the transient
editing state behind the add/edit form; only a validated draft becomes a Pet.
"""

from dataclasses import dataclass, field, replace
from typing import Any

from .ids import generate_id

COPY_SUFFIX = " (Copy)"


@dataclass
class Pet:
    """A pet shown on the pets page."""

    id: str
    name: str
    breed: str
    description: str
    fun_facts: list[str]
    image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the pet to its stored JSON shape.

        Returns:
            Dictionary using the stored camelCase field names
        """
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "breed": self.breed,
            "description": self.description,
            "funFacts": list(self.fun_facts),
        }
        if self.image:
            data["image"] = self.image
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pet":
        """
        Create a Pet from its stored JSON shape.

        Args:
            data: Dictionary as produced by to_dict

        Returns:
            Pet instance
        """
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            breed=data.get("breed", ""),
            description=data.get("description", ""),
            fun_facts=list(data.get("funFacts") or []),
            image=data.get("image") or None,
        )

    def missing_fields(self) -> list[str]:
        """Names of required fields that are empty."""
        missing = [name for name in ("name", "breed", "description") if not getattr(self, name).strip()]
        if not self.fun_facts or any(not fact.strip() for fact in self.fun_facts):
            missing.append("fun_facts")
        return missing

    def validate(self) -> bool:
        """Check the commit invariants."""
        return bool(self.id) and not self.missing_fields()

    def duplicate(self) -> "Pet":
        """Copy of this pet with a fresh id and a " (Copy)" name suffix."""
        return replace(self, id=generate_id(), name=f"{self.name}{COPY_SUFFIX}", fun_facts=list(self.fun_facts))


@dataclass
class PetDraft:
    """Editable form state for a new or existing pet."""

    name: str = ""
    breed: str = ""
    description: str = ""
    fun_facts: list[str] = field(default_factory=lambda: [""])
    image: str | None = None

    @classmethod
    def from_pet(cls, pet: Pet) -> "PetDraft":
        """Start editing an existing pet."""
        return cls(
            name=pet.name,
            breed=pet.breed,
            description=pet.description,
            fun_facts=list(pet.fun_facts) or [""],
            image=pet.image,
        )

    def add_fact(self) -> None:
        """Append an empty fun fact slot."""
        self.fun_facts.append("")

    def set_fact(self, index: int, value: str) -> None:
        """Replace the fun fact at ``index``."""
        self.fun_facts[index] = value

    def remove_fact(self, index: int) -> None:
        """Drop the fun fact at ``index``."""
        del self.fun_facts[index]

    def to_pet(self, pet_id: str | None = None) -> Pet:
        """Materialize the draft, assigning a new id unless one is given."""
        return Pet(
            id=pet_id or generate_id(),
            name=self.name,
            breed=self.breed,
            description=self.description,
            fun_facts=list(self.fun_facts),
            image=self.image or None,
        )
