"""Record store for sneaker inventory entries."""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Callable, Iterator, Mapping
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Protocol
from uuid import UUID, uuid4

from sneaker_inventory.domain.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from sneaker_inventory.domain.models import (
    DEFAULT_CONDITION,
    DEFAULT_CURRENCY,
    DEFAULT_PRICE,
    DEFAULT_SIZE,
    DEFAULT_SIZE_UNIT,
    MAX_CONDITION,
    MIN_CONDITION,
    Currency,
    Partition,
    PhotoRole,
    SizeUnit,
    SneakerRecord,
    StoreEvent,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {"name", "brand", "size", "size_unit", "price", "currency", "condition", "photos"}
)
IMMUTABLE_FIELDS = frozenset({"id", "is_wishlist"})

StoreListener = Callable[[StoreEvent], None]


class SneakerRepository(Protocol):
    """Persistence interface for sneaker records."""

    def transaction(self) -> AbstractContextManager[None]:
        """Open an all-or-nothing unit of work; nested calls join the outer one."""

    def insert(self, record: SneakerRecord) -> None:
        """Insert a new record."""

    def replace(self, record: SneakerRecord) -> None:
        """Overwrite an existing record with the same id."""

    def delete(self, record_id: UUID) -> bool:
        """Delete a record, returning whether it existed."""

    def get(self, record_id: UUID) -> SneakerRecord | None:
        """Return a record by id, if present."""

    def list_records(self, is_wishlist: bool | None = None) -> list[SneakerRecord]:
        """Return records of one partition, or all records when unfiltered."""


@dataclass
class RecordStore:
    """Application service owning the durable sneaker records.

    Every mutation runs inside a repository transaction and is committed
    before the call returns. Subscribed listeners are notified only after
    the outermost transaction commits, so they always observe committed
    state. The store holds no copy of the records itself; reads go to the
    repository every time.
    """

    repository: SneakerRepository
    listeners: list[StoreListener] = field(default_factory=list)
    _pending: list[StoreEvent] | None = field(default=None, init=False, repr=False)

    def create(self, fields: Mapping[str, object], partition: Partition) -> UUID:
        """Create a record in the given partition and return its id."""
        values = _normalize_fields(fields)
        if "name" not in values:
            raise ValidationError("Name is required", ["name"])
        photos = values.get("photos") or {}
        record = SneakerRecord(
            id=uuid4(),
            name=values["name"],
            brand=values.get("brand"),
            size=values.get("size", DEFAULT_SIZE),
            size_unit=values.get("size_unit", DEFAULT_SIZE_UNIT),
            price=values.get("price", DEFAULT_PRICE),
            currency=values.get("currency", DEFAULT_CURRENCY),
            condition=values.get("condition", DEFAULT_CONDITION),
            is_wishlist=partition.is_wishlist,
            photos={role: blob for role, blob in photos.items() if blob is not None},
        )
        with self.transaction():
            self.repository.insert(record)
            self._emit("created", record.id)
        logger.info("Created sneaker %s in %s", record.id, partition.value)
        return record.id

    def update(self, record_id: UUID, fields: Mapping[str, object]) -> None:
        """Replace the named fields on an existing record."""
        locked = sorted(IMMUTABLE_FIELDS.intersection(fields))
        if locked:
            raise ValidationError("Fields cannot be edited: " + ", ".join(locked), locked)
        values = _normalize_fields(fields)
        with self.transaction():
            current = self.get(record_id)
            if "photos" in values:
                photos = dict(current.photos)
                for role, blob in values["photos"].items():
                    if blob is None:
                        photos.pop(role, None)
                    else:
                        photos[role] = blob
                values["photos"] = photos
            self.repository.replace(replace(current, **values))
            self._emit("updated", record_id)

    def delete(self, record_id: UUID) -> None:
        """Delete a record permanently."""
        with self.transaction():
            if not self.repository.delete(record_id):
                raise NotFoundError(record_id)
            self._emit("deleted", record_id)
        logger.info("Deleted sneaker %s", record_id)

    def get(self, record_id: UUID) -> SneakerRecord:
        """Return a record by id."""
        record = self.repository.get(record_id)
        if record is None:
            raise NotFoundError(record_id)
        return record

    def list(self, partition: Partition) -> list[SneakerRecord]:
        """Return every record in a partition."""
        return self.repository.list_records(partition.is_wishlist)

    def list_all(self) -> list[SneakerRecord]:
        """Return every record in the store."""
        return self.repository.list_records()

    def set_photo(self, record_id: UUID, role: PhotoRole, data: bytes) -> None:
        """Store an encoded image in one photo slot."""
        if not data:
            raise ValidationError("Photo data is empty", ["photos"])
        self.update(record_id, {"photos": {role: data}})

    def remove_photo(self, record_id: UUID, role: PhotoRole) -> None:
        """Clear one photo slot, leaving the others untouched."""
        self.update(record_id, {"photos": {role: None}})

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a commit listener and return a callable that removes it."""
        self.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Group several store operations into one commit."""
        if self._pending is not None:
            yield
            return
        self._pending = []
        try:
            try:
                with self.repository.transaction():
                    yield
            except PersistenceError:
                logger.exception("Failed to commit sneaker changes")
                raise
            events = self._pending
        finally:
            self._pending = None
        for event in events:
            self._notify(event)

    def _emit(self, kind: str, record_id: UUID) -> None:
        if self._pending is not None:
            self._pending.append(StoreEvent(kind=kind, record_id=record_id))

    def _notify(self, event: StoreEvent) -> None:
        for listener in list(self.listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Store listener failed on %s event", event.kind)


def _normalize_fields(fields: Mapping[str, object]) -> dict[str, object]:  # noqa: C901, PLR0912
    """Validate raw form values and coerce them to domain types."""
    values: dict[str, object] = {}
    invalid: list[str] = []
    for key, value in fields.items():
        if key not in EDITABLE_FIELDS:
            invalid.append(key)
        elif key == "name":
            if isinstance(value, str) and value.strip():
                values[key] = value
            else:
                invalid.append(key)
        elif key == "brand":
            if value is None or isinstance(value, str):
                values[key] = value or None
            else:
                invalid.append(key)
        elif key == "size":
            number = _to_number(value)
            if number is not None and number > 0:
                values[key] = number
            else:
                invalid.append(key)
        elif key == "price":
            number = _to_number(value)
            if number is not None and number >= 0:
                values[key] = number
            else:
                invalid.append(key)
        elif key == "condition":
            if (
                isinstance(value, int)
                and not isinstance(value, bool)
                and MIN_CONDITION <= value <= MAX_CONDITION
            ):
                values[key] = value
            else:
                invalid.append(key)
        elif key == "size_unit":
            try:
                values[key] = SizeUnit(value)
            except ValueError:
                invalid.append(key)
        elif key == "currency":
            try:
                values[key] = Currency(value)
            except ValueError:
                invalid.append(key)
        else:
            photos = _to_photos(value)
            if photos is None:
                invalid.append(key)
            else:
                values[key] = photos
    if invalid:
        raise ValidationError("Invalid fields: " + ", ".join(invalid), invalid)
    return values


def _to_number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        return None
    if isinstance(value, Decimal) and not value.is_finite():
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def _to_photos(value: object) -> dict[PhotoRole, bytes | None] | None:
    if not isinstance(value, Mapping):
        return None
    photos: dict[PhotoRole, bytes | None] = {}
    for key, blob in value.items():
        try:
            role = PhotoRole(key)
        except ValueError:
            return None
        if blob is not None and (not isinstance(blob, bytes) or not blob):
            return None
        photos[role] = blob
    return photos
