"""Pillow implementation of the photo codec."""

from dataclasses import dataclass
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from sneaker_inventory.domain.errors import ValidationError
from sneaker_inventory.services.photos import PhotoCodec

DEFAULT_QUALITY = 80


@dataclass
class PillowPhotoCodec(PhotoCodec):
    """Stores photos as lossy JPEG blobs."""

    quality: int = DEFAULT_QUALITY
    max_dimension: int | None = None

    def encode(self, raw: bytes) -> bytes:
        """Re-encode any readable image as JPEG."""
        image = _open(raw)
        if image.mode != "RGB":
            image = image.convert("RGB")
        if self.max_dimension:
            image.thumbnail((self.max_dimension, self.max_dimension))
        buffer = BytesIO()
        image.save(buffer, "JPEG", quality=self.quality)
        return buffer.getvalue()

    def decode(self, blob: bytes) -> Image.Image:
        """Decode a stored blob for display."""
        return _open(blob)


def _open(data: bytes) -> Image.Image:
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ValidationError("Photo is not a readable image", ["photos"]) from exc
    return image
