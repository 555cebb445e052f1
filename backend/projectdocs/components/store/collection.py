"""Typed collection with CRUD and predicate queries.

Every operation reads the entire collection from the backend, works on that
copy and, for mutations, writes the whole collection back before returning.
A reentrant lock per collection serialises read-modify-write cycles.
"""

import threading
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from projectdocs.components.store.backends import CollectionBackend
from projectdocs.errors import DuplicateIdError, ValidationError
from projectdocs.utils import get_logger

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)


class Collection(Generic[ModelType]):
    """Named, ordered collection of records of one model type."""

    def __init__(self, name: str, model: type[ModelType], backend: CollectionBackend):
        """Initialize collection.

        Args:
            name: Collection name used by the backend
            model: Pydantic model class of the records
            backend: Whole-collection persistence backend
        """
        self.name = name
        self.model = model
        self.backend = backend
        self.lock = threading.RLock()

    def _load(self) -> list[dict[str, Any]]:
        return self.backend.read(self.name)

    def _save(self, records: list[dict[str, Any]]) -> None:
        self.backend.write(self.name, records)

    def _to_record(self, item: ModelType) -> dict[str, Any]:
        return item.model_dump(mode="json")

    def _to_model(self, record: dict[str, Any]) -> ModelType:
        return self.model.model_validate(record)

    def get_all(self) -> list[ModelType]:
        """Get all records in insertion order."""
        with self.lock:
            return [self._to_model(r) for r in self._load()]

    def get_by_id(self, id: str) -> ModelType | None:
        """Get record by ID.

        Returns:
            Record or None if not found
        """
        with self.lock:
            for record in self._load():
                if record.get("id") == id:
                    return self._to_model(record)
        return None

    def find(self, predicate: Callable[[ModelType], bool]) -> list[ModelType]:
        """All records matching predicate, in insertion order.

        Evaluated eagerly on every call; returns an empty list when nothing
        matches.
        """
        return [item for item in self.get_all() if predicate(item)]

    def find_one(self, predicate: Callable[[ModelType], bool]) -> ModelType | None:
        """First record matching predicate, or None."""
        return next((item for item in self.get_all() if predicate(item)), None)

    def exists(self, id: str) -> bool:
        return self.get_by_id(id) is not None

    def count(self) -> int:
        with self.lock:
            return len(self._load())

    def create(self, item: ModelType) -> ModelType:
        """Append a new record.

        Args:
            item: Record to store

        Returns:
            The stored record

        Raises:
            DuplicateIdError: If a record with the same id exists
        """
        with self.lock:
            records = self._load()
            if any(r.get("id") == item.id for r in records):
                raise DuplicateIdError(self.name, item.id)
            records.append(self._to_record(item))
            self._save(records)
        logger.debug(f"Created {self.name} record: {item.id}")
        return item

    def update(self, id: str, fields: dict[str, Any]) -> ModelType | None:
        """Shallow-merge fields into an existing record.

        Args:
            id: Record ID
            fields: Field values to overwrite

        Returns:
            Updated record, or None if the id is unknown

        Raises:
            ValidationError: If fields try to change the id
        """
        if "id" in fields and fields["id"] != id:
            raise ValidationError(f"Cannot change id of {self.name} record {id}")

        with self.lock:
            records = self._load()
            for index, record in enumerate(records):
                if record.get("id") == id:
                    merged = {**record, **fields}
                    updated = self._to_model(merged)
                    records[index] = self._to_record(updated)
                    self._save(records)
                    logger.debug(f"Updated {self.name} record: {id} ({', '.join(fields)})")
                    return updated
        return None

    def delete(self, id: str) -> bool:
        """Delete a record by ID.

        Returns:
            True if a record was removed
        """
        with self.lock:
            records = self._load()
            remaining = [r for r in records if r.get("id") != id]
            if len(remaining) == len(records):
                return False
            self._save(remaining)
        logger.debug(f"Deleted {self.name} record: {id}")
        return True

    def delete_where(self, predicate: Callable[[ModelType], bool]) -> int:
        """Delete every record matching predicate.

        Returns:
            Number of removed records
        """
        with self.lock:
            records = self._load()
            remaining = [r for r in records if not predicate(self._to_model(r))]
            removed = len(records) - len(remaining)
            if removed:
                self._save(remaining)
        return removed

    def clear(self) -> None:
        """Remove every record."""
        with self.lock:
            self.backend.drop(self.name)

    # Raw snapshot access used by EntityStore.transaction

    def snapshot(self) -> list[dict[str, Any]]:
        with self.lock:
            return self._load()

    def restore(self, records: list[dict[str, Any]]) -> None:
        with self.lock:
            self._save(records)
