"""Pydantic payloads for the sneaker API."""

from pydantic import BaseModel, ConfigDict

from sneaker_inventory.domain.models import Currency, SizeUnit


class SneakerCreate(BaseModel):
    """Form values for a new sneaker; unset fields take store defaults."""

    model_config = ConfigDict(extra="forbid")

    name: str
    brand: str | None = None
    size: float | None = None
    size_unit: SizeUnit | None = None
    price: float | None = None
    currency: Currency | None = None
    condition: int | None = None

    def to_fields(self) -> dict[str, object]:
        return self.model_dump(exclude_none=True)


class SneakerUpdate(BaseModel):
    """Edited form values; only the fields sent are replaced."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    brand: str | None = None
    size: float | None = None
    size_unit: SizeUnit | None = None
    price: float | None = None
    currency: Currency | None = None
    condition: int | None = None

    def to_fields(self) -> dict[str, object]:
        return self.model_dump(exclude_unset=True)


class MoveResult(BaseModel):
    """Outcome of moving a wishlist entry into the collection."""

    previous_id: str
    id: str
