"""Domain models for the sneaker inventory."""

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from uuid import UUID


class SizeUnit(str, enum.Enum):
    US = "US"
    EU = "EU"
    UK = "UK"


class Currency(str, enum.Enum):
    USD = "USD"
    GBP = "GBP"
    EUR = "EUR"


class PhotoRole(str, enum.Enum):
    """Fixed photo slots carried by every record."""

    FRONT = "front"
    BOX = "box"
    INSOLE = "insole"
    SIDE = "side"
    SOLE = "sole"
    BACK = "back"


class Partition(str, enum.Enum):
    """Collection/Wishlist split of the store."""

    COLLECTION = "collection"
    WISHLIST = "wishlist"

    @property
    def is_wishlist(self) -> bool:
        return self is Partition.WISHLIST

    @classmethod
    def of(cls, is_wishlist: bool) -> "Partition":
        return cls.WISHLIST if is_wishlist else cls.COLLECTION


DEFAULT_SIZE = 9.0
DEFAULT_PRICE = 0.0
DEFAULT_CURRENCY = Currency.USD
DEFAULT_SIZE_UNIT = SizeUnit.US
DEFAULT_CONDITION = 10
MIN_CONDITION = 1
MAX_CONDITION = 10


@dataclass(frozen=True)
class SneakerRecord:
    """Represents a sneaker stored in the inventory."""

    id: UUID
    name: str
    brand: str | None
    size: float
    size_unit: SizeUnit
    price: float
    currency: Currency
    condition: int
    is_wishlist: bool
    photos: Mapping[PhotoRole, bytes] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "photos", MappingProxyType(dict(self.photos)))

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def partition(self) -> Partition:
        return Partition.of(self.is_wishlist)

    def photo(self, role: PhotoRole) -> bytes | None:
        """Return the blob stored in a photo slot, if any."""
        return self.photos.get(role)


@dataclass(frozen=True)
class StoreEvent:
    """Notification emitted after a committed store mutation."""

    kind: str
    record_id: UUID


@dataclass(frozen=True)
class PartitionSummary:
    """Header totals for one partition."""

    partition: Partition
    count: int
    total_value: float
    currency: Currency | None
