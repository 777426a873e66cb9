"""
Shared machinery for entity stores.

A store hydrates once from its key when constructed and rewrites the whole
document on every committed mutation. Mutations check the owner capability
before touching anything and validate before writing.
"""

from dataclasses import fields, replace
from typing import Any, Generic, TypeVar

from ..errors import EntityNotFoundError, ValidationError
from ..logging_config import get_logger, log_user_action
from ..services.auth import require_owner
from ..storage import KeyValueStore

logger = get_logger(__name__)

T = TypeVar("T")


class CollectionStore(Generic[T]):
    """Ordered collection of entities stored as one JSON array."""

    key: str = ""
    entity_name: str = "entity"
    patchable_fields: frozenset[str] = frozenset()

    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv
        self._items: list[T] = self._load()
        logger.debug("store_hydrated", key=self.key, count=len(self._items))

    # Subclass hooks

    def _from_dict(self, data: dict[str, Any]) -> T:
        raise NotImplementedError

    def _to_dict(self, item: T) -> dict[str, Any]:
        return item.to_dict()  # type: ignore[attr-defined]

    def _identity(self, item: T) -> str:
        return item.id  # type: ignore[attr-defined]

    def _validate(self, item: T) -> None:
        """Raise ValidationError if ``item`` breaks a commit invariant."""

    def _coerce_patch(self, patch: dict[str, Any]) -> dict[str, Any]:
        return patch

    # Loading and writing

    def _load(self) -> list[T]:
        data = self.kv.read(self.key)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("store_document_not_a_list", key=self.key, type=type(data).__name__)
            return []

        items: list[T] = []
        for index, raw in enumerate(data):
            try:
                items.append(self._from_dict(raw))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning("store_record_skipped", key=self.key, index=index, error=str(e))
        return items

    def reload(self) -> None:
        """Re-read the collection from the key-value store."""
        self._items = self._load()

    def _commit(self, items: list[T]) -> None:
        self.kv.write(self.key, [self._to_dict(item) for item in items])
        self._items = items

    def _index_of(self, item_id: str) -> int:
        for index, item in enumerate(self._items):
            if self._identity(item) == item_id:
                return index
        raise EntityNotFoundError(
            f"No {self.entity_name} with id '{item_id}'",
            details={"key": self.key, "id": item_id},
        )

    # Read operations

    def list(self) -> list[T]:
        """Entities in insertion order."""
        return list(self._items)

    def get(self, item_id: str) -> T:
        """
        Look up one entity.

        Raises:
            EntityNotFoundError: If no entity has ``item_id``
        """
        return self._items[self._index_of(item_id)]

    def __len__(self) -> int:
        return len(self._items)

    # Mutations

    def _insert(self, item: T, authorized: bool) -> T:
        require_owner(authorized, f"create {self.entity_name}")
        self._validate(item)
        if any(self._identity(existing) == self._identity(item) for existing in self._items):
            raise ValidationError(
                f"Duplicate {self.entity_name} id '{self._identity(item)}'",
                code="duplicate_id",
                details={"key": self.key, "id": self._identity(item)},
            )
        self._commit([*self._items, item])
        log_user_action(f"{self.entity_name}_created", id=self._identity(item))
        return item

    def update(self, item_id: str, patch: dict[str, Any], authorized: bool) -> T:
        """
        Apply ``patch`` to one entity and persist the collection.

        Args:
            item_id: Identity of the entity to change
            patch: Field names and new values
            authorized: Owner capability

        Returns:
            The updated entity

        Raises:
            PermissionDeniedError: Without the owner capability
            EntityNotFoundError: If no entity has ``item_id``
            ValidationError: For unknown fields or a failed commit check
        """
        require_owner(authorized, f"update {self.entity_name}")
        index = self._index_of(item_id)

        unknown = set(patch) - self.patchable_fields
        if unknown:
            raise ValidationError(
                f"Cannot patch {self.entity_name} fields: {sorted(unknown)}",
                code="unknown_fields",
                details={"fields": sorted(unknown)},
            )

        updated = replace(self._items[index], **self._coerce_patch(dict(patch)))  # type: ignore[type-var]
        self._validate(updated)

        items = list(self._items)
        items[index] = updated
        self._commit(items)
        log_user_action(f"{self.entity_name}_updated", id=item_id, fields=sorted(patch))
        return updated

    def remove(self, item_id: str, authorized: bool) -> None:
        """
        Delete one entity and persist the collection.

        Raises:
            PermissionDeniedError: Without the owner capability
            EntityNotFoundError: If no entity has ``item_id``
        """
        require_owner(authorized, f"remove {self.entity_name}")
        index = self._index_of(item_id)
        self._commit(self._items[:index] + self._items[index + 1 :])
        log_user_action(f"{self.entity_name}_removed", id=item_id)


S = TypeVar("S")


class SingletonStore(Generic[S]):
    """A single document that is only ever read or updated."""

    key: str = ""
    model: Any = None

    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv
        self._value: S = self._load()

    def _load(self) -> S:
        data = self.kv.read(self.key)
        if not isinstance(data, dict):
            if data is not None:
                logger.warning("store_document_not_an_object", key=self.key, type=type(data).__name__)
            return self.model()
        try:
            return self.model.from_dict(data)
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning("store_document_unreadable", key=self.key, error=str(e))
            return self.model()

    def reload(self) -> None:
        self._value = self._load()

    def get(self) -> S:
        """A copy of the current document."""
        return self.model.from_dict(self._value.to_dict())  # type: ignore[attr-defined]

    def _commit(self, value: S) -> S:
        self.kv.write(self.key, value.to_dict())  # type: ignore[attr-defined]
        self._value = value
        return self.get()

    def update(self, patch: dict[str, Any], authorized: bool) -> S:
        """
        Replace fields of the document and persist it.

        Raises:
            PermissionDeniedError: Without the owner capability
            ValidationError: For unknown fields
        """
        require_owner(authorized, f"update {self.key}")

        known = {f.name for f in fields(self.model)}
        unknown = set(patch) - known
        if unknown:
            raise ValidationError(
                f"Cannot patch {self.key} fields: {sorted(unknown)}",
                code="unknown_fields",
                details={"fields": sorted(unknown)},
            )

        # Copy list values so the caller cannot change the document after the write
        values = {name: list(value) if isinstance(value, (list, tuple)) else value for name, value in patch.items()}
        updated = self._commit(replace(self._value, **values))  # type: ignore[type-var]
        log_user_action(f"{self.key}_updated", fields=sorted(patch))
        return updated
