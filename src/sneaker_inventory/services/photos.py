"""Photo slot management."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from PIL.Image import Image

from sneaker_inventory.domain.capture import PickerSource
from sneaker_inventory.domain.models import PhotoRole
from sneaker_inventory.services.records import RecordStore

logger = logging.getLogger(__name__)


class PhotoCodec(Protocol):
    """Interface for the stored photo encoding."""

    def encode(self, raw: bytes) -> bytes:
        """Encode raw image bytes into the stored blob format."""

    def decode(self, blob: bytes) -> Image:
        """Decode a stored blob back into an image."""


class ImagePickerProvider(Protocol):
    """Interface for the camera or photo library picker."""

    def pick(self, source: PickerSource) -> bytes | None:
        """Return the picked image bytes, or None when the user cancels."""


@dataclass
class PhotoService:
    """Encodes images and stores them in record photo slots."""

    store: RecordStore
    codec: PhotoCodec

    def attach(self, record_id: UUID, role: PhotoRole, raw: bytes) -> None:
        """Encode an image and store it in a photo slot."""
        blob = self.codec.encode(raw)
        self.store.set_photo(record_id, role, blob)

    def attach_from_picker(
        self,
        record_id: UUID,
        role: PhotoRole,
        picker: ImagePickerProvider,
        source: PickerSource,
    ) -> bool:
        """Ask the picker for an image and store it; return False on cancel."""
        raw = picker.pick(source)
        if raw is None:
            logger.info("Photo pick from %s cancelled", source.value)
            return False
        self.attach(record_id, role, raw)
        return True

    def detach(self, record_id: UUID, role: PhotoRole) -> None:
        """Clear a photo slot."""
        self.store.remove_photo(record_id, role)

    def blob(self, record_id: UUID, role: PhotoRole) -> bytes | None:
        """Return the stored blob of a photo slot, if any."""
        return self.store.get(record_id).photo(role)

    def load(self, record_id: UUID, role: PhotoRole) -> Image | None:
        """Return the decoded image of a photo slot, if any."""
        blob = self.blob(record_id, role)
        if blob is None:
            return None
        return self.codec.decode(blob)
