"""Moves wishlist entries into the collection."""

import logging
from dataclasses import dataclass
from uuid import UUID

from sneaker_inventory.domain.errors import ValidationError
from sneaker_inventory.domain.models import Partition
from sneaker_inventory.services.records import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class TransferService:
    """Copies a wishlist record into the collection and removes the original."""

    store: RecordStore

    def move_to_collection(self, source_id: UUID) -> UUID:
        """Move a wishlist record to the collection and return its new id.

        The record is re-created under a fresh id rather than flipped in
        place, so anything still holding ``source_id`` must be refreshed.
        Insert and delete share one transaction; if either fails the store
        is left exactly as it was.
        """
        with self.store.transaction():
            source = self.store.get(source_id)
            if not source.is_wishlist:
                raise ValidationError(
                    f"Sneaker {source_id} is already in the collection",
                    ["is_wishlist"],
                )
            new_id = self.store.create(
                {
                    "name": source.name,
                    "brand": source.brand,
                    "size": source.size,
                    "size_unit": source.size_unit,
                    "price": source.price,
                    "currency": source.currency,
                    "condition": source.condition,
                    "photos": dict(source.photos),
                },
                Partition.COLLECTION,
            )
            self.store.delete(source_id)
        logger.info("Moved sneaker %s to collection as %s", source_id, new_id)
        return new_id
